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

from typing import Any, Callable, Tuple


class LiteralError(ValueError):
    """Exception raised when a string is not a well-formed quoted literal.

    This is a subclass of ValueError, and so can be caught by code
    that catches ValueError.
    """


# Characters that have a two-character backslash escape, paired with the
# letter that follows the backslash. Every other lookup below is derived
# from this table.
ESCAPES: Tuple[Tuple[str, str], ...] = (
    ('"', '"'),
    ('\\', '\\'),
    ('\b', 'b'),
    ('\f', 'f'),
    ('\n', 'n'),
    ('\r', 'r'),
    ('\t', 't'),
)

_short_escapes = {ch: '\\' + code for ch, code in ESCAPES}

_unescapes = {code: ch for ch, code in ESCAPES}

FIRST_PRINTABLE = ' '
LAST_PRINTABLE = '~'

_MAX_OCTAL = 0o377


def escape_literal(s: str) -> str:
    """Escapes a string so that it can appear inside a double-quoted literal.

    Characters in the escape table get their short escapes, other printable
    ASCII characters are left alone, characters up to U+00FF become
    three-digit octal escapes and everything else becomes `\\uXXXX`.

    If nothing needed escaping, `s` itself is returned (not a copy).
    """
    ret = []
    post_esc = 0
    for i, ch in enumerate(s):
        esc = _short_escapes.get(ch)
        if esc is None:
            if FIRST_PRINTABLE <= ch <= LAST_PRINTABLE:
                continue
            esc = _numeric_escape(ch)
        if post_esc < i:
            ret.append(s[post_esc:i])
        ret.append(esc)
        post_esc = i + 1

    if not ret:
        return s
    ret.append(s[post_esc:])
    return ''.join(ret)


def escape_non_ascii(s: str) -> str:
    """Escapes a string so that the result is all printable ASCII.

    This uses the same rules as `escape_literal()` and produces the same
    output, but it works one character at a time and always returns a
    newly built string.
    """
    ret = []
    for ch in s:
        ret.append(_escape_non_ascii_char(ch))
    return ''.join(ret)


def _escape_non_ascii_char(ch: str) -> str:
    esc = _short_escapes.get(ch)
    if esc is not None:
        return esc
    if FIRST_PRINTABLE <= ch <= LAST_PRINTABLE:
        return ch
    return _numeric_escape(ch)


def _numeric_escape(ch: str) -> str:
    o = ord(ch)
    if o <= 0xFF:
        return f'\\{o:03o}'
    if o <= 0xFFFF:
        return f'\\u{o:04x}'

    # Escape each half of the UTF-16 surrogate pair, since a \u escape
    # only holds 16 bits.
    val = o - 0x10000
    high = 0xD800 + (val >> 10)
    low = 0xDC00 + (val & 0x3FF)
    return f'\\u{high:04x}\\u{low:04x}'


def unescape_literal(s: str) -> str:
    """Converts an escaped string back into the string it represents.

    This is the inverse of `escape_literal()`: for any string `s` with no
    characters above U+FFFF, `unescape_literal(escape_literal(s)) == s`.
    It is not a general-purpose decoder for source literals, and it never
    raises an error. Instead:

    - a trailing backslash is kept as-is.
    - `\\u` may be followed by more `u`s and by fewer than four hex digits;
      whatever digits are present are used.
    - octal escapes stop before a digit that would push the value past
      0o377; that digit is left in the output as plain text.
    - a backslash followed by any other character is dropped, and the
      character is kept (so `\\*` becomes `*`).

    If `s` contains no backslashes, `s` itself is returned.
    """
    ret = []
    post_esc = 0
    end = len(s)
    this_esc = s.find('\\')
    while this_esc != -1:
        ret.append(s[post_esc:this_esc])
        if this_esc == end - 1:
            ret.append('\\')
            post_esc = end
            break
        post_esc, ch = decode_escape(s, this_esc, end)
        ret.append(ch)
        this_esc = s.find('\\', post_esc)

    if post_esc == 0:
        return s
    ret.append(s[post_esc:])
    return ''.join(ret)


def decode_escape(s: str, i: int, end: int) -> Tuple[int, str]:
    """Decodes the escape sequence starting at the backslash at `s[i]`.

    There must be at least one character after the backslash. Returns the
    offset just past the sequence and the decoded character.
    """
    c = s[i + 1]
    if c in _unescapes:
        return i + 2, _unescapes[c]
    if c == 'u':
        j = i + 2
        while j < end and s[j] == 'u':
            j += 1
        return decode_numeric_escape(s, j, end, 4, ishex, 16)
    if isoct(c):
        return decode_numeric_escape(s, i + 1, end, 3, isoct, 8, _MAX_OCTAL)
    return i + 2, c


def decode_numeric_escape(
    s: str,
    start: int,
    end: int,
    max_num: int,
    fn: Callable[[str], bool],
    base: int,
    max_value: int = 0xFFFF,
) -> Tuple[int, str]:
    """Decodes a variable-length numeric escape sequence in a string.

    `start` is the offset of the first digit.
    `end` is the length of the string.
    `max_num` is the maximum number of digits to read.
    `fn` is a function that returns whether a character is a legal digit.
    `base` is the numeric base to use in the conversion (8 or 16).
    `max_value` is the largest value allowed; reading stops before any
    digit that would exceed it.

    Reading also stops at the first character that isn't a digit. Zero
    digits is allowed and yields U+0000.

    Returns the offset just past the last digit read and the
    corresponding character.
    """
    assert base in (8, 16), (
        f'Unsupported base {base} passed to decode_numeric_escape()'
    )

    val = 0
    i = start
    limit = min(end, start + max_num)
    while i < limit and fn(s[i]):
        new_val = val * base + int(s[i], base)
        if new_val > max_value:
            break
        val = new_val
        i += 1
    return i, chr(val)


def ishex(ch: str) -> bool:
    return len(ch) == 1 and ch in '0123456789abcdefABCDEF'


def isoct(ch: str) -> bool:
    return len(ch) == 1 and '0' <= ch <= '7'


def char_literal(ch: str) -> str:
    """Returns a single-quoted character literal denoting `ch`.

    Uses the same short escapes as `escape_literal()`, except that `'` is
    escaped and `"` is not. Other characters are not escaped at all.
    """
    _check_char(ch)
    if ch == "'":
        return "'\\''"
    if ch != '"' and ch in _short_escapes:
        return "'" + _short_escapes[ch] + "'"
    return "'" + ch + "'"


def escape_char(ch: str) -> str:
    """Returns the escaped form of `ch` for use in a double-quoted literal.

    Only characters in the escape table are changed; this does not produce
    numeric escapes. Use `escape_literal()` for that.
    """
    _check_char(ch)
    return _short_escapes.get(ch, ch)


def quote_string(s: str, ascii_only: bool = False) -> str:
    """Returns a double-quoted, escaped version of the string."""
    if ascii_only:
        return '"' + escape_non_ascii(s) + '"'
    return '"' + escape_literal(s) + '"'


def unquote_string(s: str) -> str:
    """Strips the double quotes from a quoted literal and unescapes it.

    Raises LiteralError if `s` isn't wrapped in double quotes.
    """
    if len(s) < 2 or s[0] != '"' or s[-1] != '"':
        raise LiteralError(f'Expected a double-quoted string, got {s!r}')
    return unescape_literal(s[1:-1])


def _check_char(obj: Any) -> None:
    if not isinstance(obj, str):
        raise TypeError(f'{obj!r} is not a character')
    if len(obj) != 1:
        raise ValueError(f'{obj!r} is not a single character')


encode = escape_literal
encode_ascii_only = escape_non_ascii
decode = unescape_literal
