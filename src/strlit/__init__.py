# Copyright 2025 Dirk Pranke. All rights reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Escaping and unescaping of strings for use in quoted source literals.

The main entry points are:

- escape_literal   - Returns a printable-ASCII escaped version of a string,
                     suitable for putting between double quotes. Returns
                     the string itself if nothing needed escaping.
- unescape_literal - The inverse of escape_literal.
- escape_non_ascii - Like escape_literal, but always returns a new string.
- char_literal     - Returns a single-quoted literal for one character.

`encode`, `decode` and `encode_ascii_only` are aliases for the first
three.

It also provides a number of other utility functions:

- escape_char    - Returns the escape for one character in a double-quoted
                   literal (no numeric escapes).
- quote_string   - Returns an escaped string wrapped in double quotes.
- unquote_string - Strips double quotes from a literal and unescapes it.
- decode_escape  - Decodes a single escape sequence.
- ishex          - Returns whether a character is a hex digit.
- isoct          - Returns whether a character is an octal digit.
"""

import types

from .api import (  # noqa: F401 (unused-import)
    ESCAPES,
    char_literal,
    decode,
    decode_escape,
    encode,
    encode_ascii_only,
    escape_char,
    escape_literal,
    escape_non_ascii,
    ishex,
    isoct,
    quote_string,
    unescape_literal,
    unquote_string,
    LiteralError,
)
from .version import __version__


__all__ = []
for _k in list(globals()):
    if not _k.startswith('_') and not isinstance(
        globals()[_k], types.ModuleType
    ):
        __all__.append(_k)
__all__.append('__version__')
