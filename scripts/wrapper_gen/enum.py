"""
Enum binding generation module

Collects the enums referenced by translated methods and generates their
registration on the JavaScript global object.
"""

from typing import Iterable, Optional

from .codegen import CodeGen, js_string
from .ir import WrapperDescriptor


class EnumGenerator:
    """Generates enum constant bindings"""

    def collect(self, descriptors: Iterable[Optional[WrapperDescriptor]]) -> dict[str, tuple[tuple[str, int], ...]]:
        """Merge referenced enums by name, later occurrences win"""
        enums: dict[str, tuple[tuple[str, int], ...]] = {}
        for desc in descriptors:
            if desc is None:
                continue
            for enum in desc.enums:
                if enum is None:
                    continue
                previous = enums.get(enum.name)
                if previous is not None and previous != enum.values:
                    print(f'  >> warning: enum {enum.name} is referenced with different values, '
                          f'keeping the last one')
                enums[enum.name] = enum.values
        return enums

    def generate(self, name: str, values: tuple[tuple[str, int], ...], gen: CodeGen):
        """Generate a block setting `name` on the global object"""
        with gen.block('{'):
            gen.line('jerry_value_t enum_obj = jerry_create_object();')
            gen.line()
            for label, value in values:
                with gen.block('{'):
                    gen.line(f'jerry_value_t enum_key = {js_string(label)};')
                    gen.line(f'jerry_value_t enum_val = jerry_create_number((double) {value});')
                    gen.line('jerry_release_value(jerry_set_property(enum_obj, enum_key, enum_val));')
                    gen.line('jerry_release_value(enum_val);')
                    gen.line('jerry_release_value(enum_key);')
            gen.line()
            gen.line('jerry_value_t global_obj = jerry_get_global_object();')
            gen.line(f'jerry_value_t enum_name = {js_string(name)};')
            gen.line('jerry_release_value(jerry_set_property(global_obj, enum_name, enum_obj));')
            gen.line('jerry_release_value(enum_name);')
            gen.line('jerry_release_value(global_obj);')
            gen.line('jerry_release_value(enum_obj);')
