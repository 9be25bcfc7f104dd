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

"""A tool to escape and unescape strings for use in quoted literals.

Usage:

    $ printf 'tab\\there' | strlit
    tab\\there
    $ strlit -q -c 'say "hi"'
    "say \\"hi\\""
    $ strlit -d -c '\\101\\u0042C'
    ABC
"""

import argparse
import importlib.util
import pathlib
import sys

# If necessary, add ../.. to sys.path so that we can run strlit even when
# it's not installed.
if (
    'strlit' not in sys.modules
    and importlib.util.find_spec('strlit') is None
):
    sys.path.insert(
        0, str(pathlib.Path(__file__).parent.parent)
    )  # pragma: no cover

# pylint: disable=wrong-import-position
import strlit
from strlit import support


def main(argv=None, host=None):
    host = host or support.Host()

    try:
        args = _parse_args(host, argv)

        if args.version:
            host.print(strlit.__version__)
            return 0

        if args.char and args.decode:
            host.print('--char cannot be used with --decode', file=host.stderr)
            return 2

        inp = _read_input(host, args)

        if args.char:
            if len(inp) != 1:
                host.print(
                    f'--char needs exactly one character, got {inp!r}',
                    file=host.stderr,
                )
                return 1
            out = strlit.char_literal(inp)
        elif args.decode:
            if args.quote:
                out = strlit.unquote_string(inp)
            else:
                out = strlit.unescape_literal(inp)
        elif args.quote:
            out = strlit.quote_string(inp, ascii_only=args.ascii)
        elif args.ascii:
            out = strlit.escape_non_ascii(inp)
        else:
            out = strlit.escape_literal(inp)

        host.print(out)
        return 0

    except KeyboardInterrupt:  # pragma: no cover
        host.print('Interrupted, exiting.', file=host.stderr)
        return 130  # SIGINT
    except strlit.LiteralError as exc:
        host.print(str(exc), file=host.stderr)
        return 1


def _read_input(host, args):
    if args.cmd is not None:
        return args.cmd
    if args.file == '-':
        inp = host.stdin.read()
    else:
        inp = host.read_text_file(args.file)
    if not args.keep_newline and inp.endswith('\n'):
        inp = inp[:-1]
    return inp


class _HostedArgumentParser(argparse.ArgumentParser):
    """An argument parser that plays nicely w/ host objects."""

    def __init__(self, host, **kwargs):
        self.host = host
        super().__init__(**kwargs)

    def exit(self, status=0, message=None):
        if message:
            self._print_message(message, self.host.stderr)
        sys.exit(status)

    def error(self, message):
        self.host.print(f'usage: {self.usage}', end='', file=self.host.stderr)
        self.host.print('    -h/--help for help\n', file=self.host.stderr)
        self.exit(2, f'error: {message}\n')

    def print_help(self, file=None):
        self.host.print(self.format_help(), file=file)


def _parse_args(host, argv):
    usage = 'strlit [options] [FILE]\n'

    parser = _HostedArgumentParser(
        host,
        prog='strlit',
        usage=usage,
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        '-V',
        '--version',
        action='store_true',
        help=f'show version ({strlit.__version__})',
    )
    parser.add_argument(
        '-c',
        metavar='STR',
        dest='cmd',
        help='inline string to read instead of reading from a file',
    )
    parser.add_argument(
        '-d',
        '--decode',
        action='store_true',
        help='unescape the input instead of escaping it',
    )
    parser.add_argument(
        '-a',
        '--ascii',
        action='store_true',
        help='escape with escape_non_ascii() (always builds a new string)',
    )
    parser.add_argument(
        '-q',
        '--quote',
        action='store_true',
        help='wrap the escaped output in double quotes (or, with '
        '--decode, require and strip them from the input)',
    )
    parser.add_argument(
        '--char',
        action='store_true',
        help='print the single-quoted character literal for a '
        'one-character input',
    )
    parser.add_argument(
        '--keep-newline',
        dest='keep_newline',
        action='store_true',
        help='do not strip a single trailing newline from input read '
        'from a file or stdin',
    )
    parser.add_argument(
        'file',
        metavar='FILE',
        nargs='?',
        default='-',
        help='optional file to read the string from; if '
        'not specified or "-", will read from stdin '
        'instead',
    )
    return parser.parse_args(argv)


if __name__ == '__main__':  # pragma: no cover
    sys.exit(main())
