"""
Module assembly

Builds the module plan from translated methods and renders the JerryScript
translation unit plus its build descriptors.
"""

import json

from .codegen import CodeGen, as_identifier, js_error
from .enum import EnumGenerator
from .ir import MethodGroup, ModuleArtifact, ModulePlan

PROVENANCE = '/* machine generated by gen-js-wrapper, do not edit */'

DISPATCH_SIGNATURE = ('(const jerry_value_t function_obj, const jerry_value_t this_val, '
                      'const jerry_value_t args_p[], const jerry_length_t args_count)')

STATIC_LIBRARY = 'cppmodulestatic'


class AssemblyError(Exception):
    """A fragment the translation unit needs is missing"""


class ModuleAssembler:
    """Renders a module plan into the generated files"""

    def __init__(self, library_name: str):
        self.library_name = library_name.lower()
        self.enum_gen = EnumGenerator()

    def assemble(self, plan: ModulePlan) -> ModuleArtifact:
        if not plan.destructor:
            raise AssemblyError(f'no destructor fragment for {plan.js_class_name}')
        if not plan.native_wrapper:
            raise AssemblyError(f'no native wrapper fragment for {plan.js_class_name}')

        ident = as_identifier(plan.js_class_name)
        return ModuleArtifact(
            library_name=self.library_name,
            cpp=self.render_cpp(plan),
            cmake_lists=self.render_cmake_lists(ident),
            modules_json=self.render_modules_json(ident),
            module_cmake=self.render_module_cmake(),
        )

    def render_cpp(self, plan: ModulePlan) -> str:
        gen = CodeGen()
        ident = as_identifier(plan.js_class_name)

        gen.line(PROVENANCE)
        gen.line()
        gen.line('#include "jerryscript.h"')
        gen.line()
        gen.line(plan.header_line)
        gen.line()
        gen.raw(plan.destructor)
        gen.line()

        for group in plan.methods:
            self._gen_dispatcher(plan, group, f'{plan.js_class_name}#{group.name}',
                                 f'{plan.js_class_name}#{group.name} (native JavaScript method)', gen)

        gen.raw(plan.native_wrapper)
        gen.line()

        self._gen_dispatcher(plan, plan.constructor, plan.js_class_name,
                             f'{plan.js_class_name} (native JavaScript constructor)', gen)

        with gen.block(f'extern "C" jerry_value_t Init{ident}() {{'):
            for name, values in plan.enums.items():
                self.enum_gen.generate(name, values, gen)
                gen.line()
            gen.line(f'return jerry_create_external_function({plan.constructor.function_name});')
        gen.line()
        return gen.output()

    def _gen_dispatcher(self, plan: ModulePlan, group: MethodGroup, where: str, title: str, gen: CodeGen):
        """One function selecting the overload by argument count, first match wins"""
        gen.line('/**')
        gen.line(f' * {title}')
        # Native methods behind the dispatcher
        for desc in group.overloads:
            if desc.signature:
                gen.line(f' *   {plan.class_name}::{desc.signature}')
        gen.line(' */')
        with gen.block(f'jerry_value_t {group.function_name}{DISPATCH_SIGNATURE} {{'):
            for desc in group.overloads:
                with gen.block(f'if (args_count == {desc.args_count}) {{'):
                    gen.raw(desc.body)
            gen.line(f'return {js_error(f"{where}: unexpected number of arguments")};')
        gen.line()

    def render_cmake_lists(self, project: str) -> str:
        return (f'project({project} CXX)\n'
                f'\n'
                f'file(GLOB CPP_SRC ./*.cpp)\n'
                f'add_library({STATIC_LIBRARY} STATIC\n'
                f'    ${{CPP_SRC}}\n'
                f')\n'
                f'\n'
                f'target_include_directories({STATIC_LIBRARY} PRIVATE ${{JERRY_INCLUDE_DIR}})\n'
                f'target_link_libraries({STATIC_LIBRARY} PUBLIC stdc++)\n')

    def render_modules_json(self, ident: str) -> str:
        manifest = {
            'modules': {
                self.library_name: {
                    'native_files': [],
                    'init': f'Init{ident}',
                    'cmakefile': 'module.cmake',
                },
            },
        }
        return json.dumps(manifest, indent=2) + '\n'

    def render_module_cmake(self) -> str:
        return (f'set(MODULE_NAME "{self.library_name}")\n'
                f'add_subdirectory(${{MODULE_DIR}}/lib/ ${{MODULE_BINARY_DIR}}/${{MODULE_NAME}})\n'
                f'list(APPEND MODULE_LIBS {STATIC_LIBRARY})\n')
