"""
Type conversion module

Classifies DWARF types and provides JavaScript <-> C++ conversion code
generation for JerryScript.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Optional, TYPE_CHECKING

from .codegen import is_int_type, is_float_type, is_char_type
from .ir import EnumDescriptor

if TYPE_CHECKING:
    from .symbols import SymbolTree, SymbolNode

VOID = 'void'
BOOL = 'bool'
INT = 'int'
FLOAT = 'float'
STRING = 'string'
ENUM = 'enum'
UNSUPPORTED = 'unsupported'

SCALAR_CATEGORIES = (BOOL, INT, FLOAT, ENUM)


@dataclass(frozen=True)
class TypeInfo:
    """Resolved parameter or return type"""
    spelling: str
    category: str
    enum: Optional[EnumDescriptor] = None

    @property
    def supported(self) -> bool:
        return self.category != UNSUPPORTED


@dataclass
class ConversionContext:
    """Context for type conversion code generation"""
    idx: int              # Index into args_p
    var: str              # C++ variable name
    type: TypeInfo        # Resolved type


class TypeHandler(ABC):
    """Base class for custom type handlers"""

    @abstractmethod
    def js_check(self, ctx: ConversionContext) -> str:
        """Condition that is true when args_p[idx] cannot be converted"""
        pass

    @abstractmethod
    def js_to_native(self, ctx: ConversionContext) -> str:
        """Generate code declaring the C++ variable from args_p[idx]"""
        pass

    @abstractmethod
    def native_to_js(self, ctx: ConversionContext) -> str:
        """Expression converting the C++ variable to a jerry_value_t"""
        pass


UNSUPPORTED_TYPE = TypeInfo(spelling='?', category=UNSUPPORTED)


class TypeConverter:
    """Manages type conversion between JavaScript and C++"""

    def __init__(self, tree: 'SymbolTree'):
        self.tree = tree
        self._handlers: dict[str, TypeHandler] = {}

    def register(self, type_name: str, handler: TypeHandler):
        """Register a custom type handler"""
        self._handlers[type_name] = handler

    def has_handler(self, type_name: str) -> bool:
        """Check if a custom handler exists for this type"""
        return type_name in self._handlers

    def describe(self, type_offset: Optional[int]) -> TypeInfo:
        """Resolve a DW_AT_type reference (None means void)"""
        if type_offset is None:
            return TypeInfo(spelling='void', category=VOID)
        node = self.tree.lookup(type_offset)
        if node is None:
            return UNSUPPORTED_TYPE
        return self._describe_node(node)

    def _describe_node(self, node: 'SymbolNode') -> TypeInfo:
        name = node.qualified_name
        if name is not None and self.has_handler(name):
            return TypeInfo(spelling=name, category=name)

        if node.tag == 'base_type':
            if name == 'bool':
                return TypeInfo(spelling=name, category=BOOL)
            if is_int_type(name):
                return TypeInfo(spelling=name, category=INT)
            if is_float_type(name):
                return TypeInfo(spelling=name, category=FLOAT)
            return UNSUPPORTED_TYPE

        if node.tag == 'typedef':
            inner = self.describe(node.type_offset)
            if inner.category not in SCALAR_CATEGORIES:
                return inner
            enum = inner.enum
            if enum is not None and not enum.name:
                enum = replace(enum, name=node.name)
            return TypeInfo(spelling=name, category=inner.category, enum=enum)

        if node.tag in ('const_type', 'volatile_type'):
            # Top-level qualifiers do not matter for a by-value copy
            return self.describe(node.type_offset)

        if node.tag in ('reference_type', 'rvalue_reference_type'):
            target = self.tree.lookup(node.type_offset)
            if target is None or target.tag != 'const_type':
                return UNSUPPORTED_TYPE
            inner = self.describe(target.type_offset)
            return inner if inner.category in SCALAR_CATEGORIES else UNSUPPORTED_TYPE

        if node.tag == 'pointer_type':
            return self._describe_pointer(node)

        if node.tag == 'enumeration_type':
            values = tuple(
                (item.name, item.const_value)
                for item in node.children_tagged('enumerator')
                if item.name is not None and item.const_value is not None
            )
            enum = EnumDescriptor(name=node.name or '', values=values)
            return TypeInfo(spelling=name or 'int', category=ENUM, enum=enum)

        return UNSUPPORTED_TYPE

    def _describe_pointer(self, node: 'SymbolNode') -> TypeInfo:
        """Only pointers to char are supported (C strings)"""
        target = self.tree.lookup(node.type_offset)
        is_const = False
        while target is not None and target.tag in ('const_type', 'volatile_type', 'typedef'):
            if target.tag == 'const_type':
                is_const = True
            target = self.tree.lookup(target.type_offset)
        if target is None or target.tag != 'base_type' or not is_char_type(target.name):
            return UNSUPPORTED_TYPE
        spelling = 'const char*' if is_const else 'char*'
        return TypeInfo(spelling=spelling, category=STRING)

    def js_check(self, info: TypeInfo, idx: int) -> str:
        """Condition that rejects args_p[idx]"""
        arg = f'args_p[{idx}]'
        if self.has_handler(info.category):
            ctx = ConversionContext(idx=idx, var='', type=info)
            return self._handlers[info.category].js_check(ctx)
        if info.category == BOOL:
            return f'!jerry_value_is_boolean({arg})'
        if info.category == STRING:
            return f'!jerry_value_is_string({arg})'
        return f'!jerry_value_is_number({arg})'

    def js_to_native(self, info: TypeInfo, idx: int, var: str) -> list[str]:
        """Generate code declaring `var` from args_p[idx]"""
        arg = f'args_p[{idx}]'
        if self.has_handler(info.category):
            ctx = ConversionContext(idx=idx, var=var, type=info)
            return self._handlers[info.category].js_to_native(ctx).split('\n')

        if info.category == BOOL:
            return [f'bool {var} = jerry_get_boolean_value({arg});']

        elif info.category in (INT, FLOAT):
            return [f'{info.spelling} {var} = ({info.spelling})jerry_get_number_value({arg});']

        elif info.category == ENUM:
            return [f'{info.spelling} {var} = ({info.spelling})(int)jerry_get_number_value({arg});']

        elif info.category == STRING:
            return [
                f'jerry_size_t {var}_size = jerry_get_string_size({arg});',
                f'char* {var} = new char[{var}_size + 1];',
                f'jerry_string_to_char_buffer({arg}, (jerry_char_t*){var}, {var}_size);',
                f"{var}[{var}_size] = '\\0';",
            ]

        raise ValueError(f'cannot convert {info.spelling} from JavaScript')

    def cleanup(self, info: TypeInfo, var: str) -> list[str]:
        """Release temporaries created by js_to_native"""
        if info.category == STRING:
            return [f'delete[] {var};']
        return []

    def native_to_js(self, info: TypeInfo, var: str) -> str:
        """Expression converting `var` to a jerry_value_t"""
        if self.has_handler(info.category):
            ctx = ConversionContext(idx=0, var=var, type=info)
            return self._handlers[info.category].native_to_js(ctx)

        if info.category == VOID:
            return 'jerry_create_undefined()'

        elif info.category == BOOL:
            return f'jerry_create_boolean({var})'

        elif info.category in (INT, FLOAT, ENUM):
            return f'jerry_create_number((double){var})'

        elif info.category == STRING:
            return f'{var} ? jerry_create_string((const jerry_char_t*){var}) : jerry_create_null()'

        raise ValueError(f'cannot convert {info.spelling} to JavaScript')
