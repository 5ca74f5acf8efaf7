"""
Method binding generation module

Translates the methods of a native class into JerryScript wrapper bodies,
and renders the per-class destructor and instance wrapper.
"""

from typing import Optional, TYPE_CHECKING

from .codegen import CodeGen, as_identifier, is_identifier, js_error, js_string, strip_template_args
from .ir import CONSTRUCTOR, EnumDescriptor, MethodGroup, WrapperDescriptor
from .types import VOID, TypeInfo

if TYPE_CHECKING:
    from .symbols import SymbolNode
    from .types import TypeConverter


class MethodTranslator:
    """Generates wrapper descriptors for class methods"""

    def __init__(self, class_node: 'SymbolNode', js_class_name: str, type_conv: 'TypeConverter'):
        self.class_node = class_node
        self.class_name = class_node.qualified_name
        self.js_class_name = js_class_name
        self.ident = as_identifier(js_class_name)
        self.type_conv = type_conv

    @property
    def native_info(self) -> str:
        return f'{self.ident}_native_info'

    @property
    def destructor_function(self) -> str:
        return f'Destruct_{self.ident}'

    @property
    def wrap_function(self) -> str:
        return f'{self.ident}_wrap_native'

    def helper_names(self) -> list[str]:
        """Symbols generated besides the method dispatchers"""
        return [self.destructor_function, self.native_info, self.wrap_function]

    def signature(self, method: 'SymbolNode') -> str:
        """Readable native signature, e.g. on(int)"""
        params = [self.type_conv.describe(p.type_offset).spelling for p in self._params(method)]
        return f'{method.name}({", ".join(params)})'

    def translate(self, method: 'SymbolNode', siblings: list['SymbolNode']) -> Optional[WrapperDescriptor]:
        """Translate one method, or return None when it cannot be wrapped"""
        name = method.name
        if not name or not is_identifier(name):
            return None
        if method.children_tagged('unspecified_parameters'):
            return None

        is_ctor = name == strip_template_args(self.class_node.name)
        params = self._params(method)
        param_types = [self.type_conv.describe(p.type_offset) for p in params]
        if not all(t.supported and t.category != VOID for t in param_types):
            return None

        result_type = self.type_conv.describe(method.type_offset)
        if not is_ctor and not result_type.supported:
            return None

        is_static = not is_ctor and not any(p.is_artificial for p in method.children_tagged('formal_parameter'))
        where = self.js_class_name if is_ctor else f'{self.js_class_name}#{name}'

        gen = CodeGen()
        if any(s is not method and s.name == name for s in siblings):
            gen.line(f'// {self.signature(method)}')

        if not is_ctor and not is_static:
            gen.line('void* native_ptr;')
            with gen.block(f'if (!jerry_get_object_native_pointer(this_val, &native_ptr, &{self.native_info})) {{'):
                gen.line(f'return {js_error(f"{where}: this is not a {self.js_class_name}")};')
            gen.line(f'{self.class_name}* native_obj = static_cast<{self.class_name}*>(native_ptr);')

        for i, info in enumerate(param_types):
            with gen.block(f'if ({self.type_conv.js_check(info, i)}) {{'):
                gen.line(f'return {js_error(f"{where}: argument {i} has the wrong type")};')

        args = []
        for i, info in enumerate(param_types):
            var = f'arg{i}'
            gen.lines(*self.type_conv.js_to_native(info, i, var))
            args.append(var)
        args_str = ', '.join(args)

        cleanup: list[str] = []
        for var, info in zip(args, param_types):
            cleanup.extend(self.type_conv.cleanup(info, var))

        if is_ctor:
            gen.line(f'{self.class_name}* native_obj = new {self.class_name}({args_str});')
            gen.lines(*cleanup)
            gen.line(f'return {self.wrap_function}(native_obj);')
        else:
            target = f'{self.class_name}::{name}' if is_static else f'native_obj->{name}'
            if result_type.category == VOID:
                gen.line(f'{target}({args_str});')
                gen.lines(*cleanup)
                gen.line('return jerry_create_undefined();')
            else:
                gen.line(f'{result_type.spelling} result = {target}({args_str});')
                gen.lines(*cleanup)
                gen.line(f'return {self.type_conv.native_to_js(result_type, "result")};')

        return WrapperDescriptor(
            name=CONSTRUCTOR if is_ctor else name,
            args_count=len(params),
            body=gen.output(),
            enums=self._enums(param_types + [result_type]),
            signature=self.signature(method),
        )

    def create_destructor(self) -> str:
        """Free callback releasing the native object with its JS wrapper"""
        gen = CodeGen()
        gen.line('/**')
        gen.line(f' * {self.js_class_name}#destructor')
        gen.line(' */')
        with gen.block(f'void {self.destructor_function}(void* native_p) {{'):
            gen.line(f'delete static_cast<{self.class_name}*>(native_p);')
        gen.line()
        gen.line(f'static const jerry_object_native_info_t {self.native_info} = {{ {self.destructor_function} }};')
        return gen.output()

    def create_native_wrapper(self, groups: list[MethodGroup]) -> str:
        """JS object wrapping a native instance, with every method attached"""
        gen = CodeGen()
        gen.line('/**')
        gen.line(f' * Wrap a native {self.class_name} in a JavaScript object')
        gen.line(' */')
        with gen.block(f'jerry_value_t {self.wrap_function}({self.class_name}* native_obj) {{'):
            gen.line('jerry_value_t js_obj = jerry_create_object();')
            gen.line(f'jerry_set_object_native_pointer(js_obj, native_obj, &{self.native_info});')
            for group in groups:
                gen.line()
                with gen.block('{'):
                    gen.line(f'jerry_value_t prop_name = {js_string(group.name)};')
                    gen.line(f'jerry_value_t prop_fn = jerry_create_external_function({group.function_name});')
                    gen.line('jerry_release_value(jerry_set_property(js_obj, prop_name, prop_fn));')
                    gen.line('jerry_release_value(prop_fn);')
                    gen.line('jerry_release_value(prop_name);')
            gen.line()
            gen.line('return js_obj;')
        return gen.output()

    def _params(self, method: 'SymbolNode') -> list['SymbolNode']:
        return [p for p in method.children_tagged('formal_parameter') if not p.is_artificial]

    @staticmethod
    def _enums(types: list[TypeInfo]) -> tuple[EnumDescriptor, ...]:
        return tuple(t.enum for t in types if t.enum is not None and t.enum.name)
