"""
Code generation utilities

Provides helpers for generating C++ code.
"""

import re


class CodeGen:
    """Code generation helper with indentation support"""

    def __init__(self):
        self._lines: list[str] = []
        self._indent: int = 0
        self._indent_str: str = '    '  # 4 spaces

    def line(self, text: str = ''):
        """Add a line with current indentation"""
        if text:
            self._lines.append(self._indent_str * self._indent + text)
        else:
            self._lines.append('')

    def lines(self, *texts: str):
        """Add multiple lines"""
        for text in texts:
            self.line(text)

    def raw(self, text: str):
        """Add a multi-line fragment, indenting each non-empty line"""
        for text_line in text.split('\n'):
            self.line(text_line)

    def indent(self):
        """Increase indentation"""
        self._indent += 1

    def dedent(self):
        """Decrease indentation"""
        if self._indent > 0:
            self._indent -= 1

    def block(self, header: str, footer: str = '}'):
        """Context manager for code blocks"""
        return _BlockContext(self, header, footer)

    def output(self) -> str:
        """Get generated code as string"""
        return '\n'.join(self._lines)


class _BlockContext:
    """Context manager for indented code blocks"""

    def __init__(self, gen: CodeGen, header: str, footer: str):
        self._gen = gen
        self._header = header
        self._footer = footer

    def __enter__(self):
        self._gen.line(self._header)
        self._gen.indent()
        return self

    def __exit__(self, *args):
        self._gen.dedent()
        self._gen.line(self._footer)


_IDENTIFIER_RE = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')


def is_identifier(name: str) -> bool:
    """Check if name is a plain C++ identifier (no operators, no templates)"""
    return _IDENTIFIER_RE.match(name) is not None


def as_identifier(name: str) -> str:
    """Turn a class name into something usable inside a C identifier

    Examples:
        Led -> Led
        Vector<int> -> Vector_int
        ns::Led -> ns_Led
    """
    result = re.sub(r'[^A-Za-z0-9_]+', '_', name).strip('_')
    if result and result[0].isdigit():
        result = '_' + result
    return result


def strip_template_args(name: str) -> str:
    """Vector<int> -> Vector"""
    if '<' in name:
        return name[:name.index('<')]
    return name


def c_string(text: str) -> str:
    """Quote text as a C string literal"""
    escaped = text.replace('\\', '\\\\').replace('"', '\\"')
    return f'"{escaped}"'


def js_string(text: str) -> str:
    """JerryScript string value for a literal"""
    return f'jerry_create_string((const jerry_char_t*){c_string(text)})'


def js_error(message: str) -> str:
    """Expression creating a JavaScript TypeError"""
    return f'jerry_create_error(JERRY_ERROR_TYPE, (const jerry_char_t*){c_string(message)})'


def is_int_type(type_str: str) -> bool:
    """Check if a DWARF base type name is an integer type"""
    return type_str in [
        'char', 'signed char', 'unsigned char',
        'short', 'short int', 'short unsigned int', 'unsigned short',
        'int', 'unsigned int', 'unsigned',
        'long', 'long int', 'long unsigned int', 'unsigned long',
        'long long', 'long long int', 'long long unsigned int', 'unsigned long long',
        'wchar_t', 'char16_t', 'char32_t',
    ]


def is_float_type(type_str: str) -> bool:
    """Check if a DWARF base type name is a float type"""
    return type_str in ['float', 'double', 'long double']


def is_char_type(type_str: str) -> bool:
    return type_str in ['char', 'signed char', 'unsigned char']
