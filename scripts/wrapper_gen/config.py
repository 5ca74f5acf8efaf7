"""
Generator configuration

Built once from the command line and passed to every pipeline stage.
"""

import argparse
from dataclasses import dataclass

DEFAULT_OUTPUT_DIR = 'output'


class UsageError(Exception):
    """Missing or contradictory command line arguments"""


@dataclass(frozen=True)
class GeneratorConfig:
    """Configuration for one generation run"""
    symbols_file: str
    class_name: str
    js_class_name: str
    library_name: str
    header_line: str
    create_files: bool = True
    output_dir: str = DEFAULT_OUTPUT_DIR

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> 'GeneratorConfig':
        """Validate parsed arguments, fill in the derived defaults"""
        if not args.symbols_file or not args.class_name:
            raise UsageError('missing symbols file or class name')

        class_name = args.class_name
        js_class_name = args.js_class_name or class_name
        if '<' in class_name and js_class_name == class_name:
            raise UsageError('When passing in a generic classname, please also pass in --js-class-name')

        library_name = (args.library_name or js_class_name).lower()

        if args.header_file:
            header_line = f'#include "{args.header_file}"'
        else:
            header_line = f'// @todo: add a reference to the {class_name} header here'

        return cls(
            symbols_file=args.symbols_file,
            class_name=class_name,
            js_class_name=js_class_name,
            library_name=library_name,
            header_line=header_line,
            create_files=not args.dont_create_files,
            output_dir=args.output_dir or DEFAULT_OUTPUT_DIR,
        )
