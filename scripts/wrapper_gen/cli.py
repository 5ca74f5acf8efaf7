"""
gen-js-wrapper command line

Usage:
    gen-js-wrapper symbolsfile.txt classname [--js-class-name output-classname]
        [--library-name lib-name] [--header-file path] [--dont-create-files]
        [--output-dir dir]
"""

import argparse
import sys
from typing import Optional, Sequence

from .assembler import AssemblyError
from .config import DEFAULT_OUTPUT_DIR, GeneratorConfig, UsageError
from .generator import Generator
from .resolver import ClassNotFoundError

USAGE = ('Usage: gen-js-wrapper symbolsfile.txt classname '
         '[--js-class-name output-classname --library-name lib-name]')


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(description='Generate a JerryScript module wrapping a C++ class')
    parser.add_argument('symbols_file', nargs='?',
                        help='Output of objdump --dwarf=info for the binary')
    parser.add_argument('class_name', nargs='?',
                        help='Native class name, e.g. DigitalOut or Vector<int>')
    parser.add_argument('--js-class-name', default=None,
                        help='JavaScript class name (required for generic class names)')
    parser.add_argument('--library-name', default=None,
                        help='Module name (default: lowercased JavaScript class name)')
    parser.add_argument('--header-file', default=None,
                        help='Header to include in the generated source')
    parser.add_argument('--dont-create-files', action='store_true',
                        help='Run the generator without writing anything')
    parser.add_argument('--output-dir', default=DEFAULT_OUTPUT_DIR,
                        help=f'Output root (default: {DEFAULT_OUTPUT_DIR})')
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        config = GeneratorConfig.from_args(build_parser().parse_args(argv))
    except UsageError as e:
        print(e, file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 1

    try:
        Generator(config).generate()
    except (ClassNotFoundError, AssemblyError) as e:
        print(e, file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
