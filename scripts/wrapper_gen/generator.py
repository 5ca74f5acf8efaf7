"""
Main generator module

Orchestrates all components to generate a complete JerryScript module for one
native class.
"""

import os

from .assembler import ModuleAssembler
from .config import GeneratorConfig
from .enum import EnumGenerator
from .func import MethodTranslator
from .ir import ModuleArtifact, ModulePlan
from .overload import OverloadGrouper
from .resolver import resolve_class, select_methods
from .symbols import SymbolTree
from .types import TypeConverter, TypeHandler


class Generator:
    """Main wrapper generator"""

    def __init__(self, config: GeneratorConfig):
        self.config = config
        self._type_handlers: dict[str, TypeHandler] = {}

    def type_handler(self, type_name: str):
        """Decorator to register a type handler"""
        def decorator(cls):
            self._type_handlers[type_name] = cls()
            return cls
        return decorator

    def load_symbols(self) -> SymbolTree:
        return SymbolTree.load(self.config.symbols_file)

    def build(self, tree: SymbolTree) -> ModuleArtifact:
        """Run the pipeline from the symbol tree to the module texts"""
        config = self.config
        class_node = resolve_class(tree, config.class_name)

        type_conv = TypeConverter(tree)
        for type_name, handler in self._type_handlers.items():
            type_conv.register(type_name, handler)

        translator = MethodTranslator(class_node, config.js_class_name, type_conv)
        methods = select_methods(class_node)
        descriptors = []
        for method in methods:
            desc = translator.translate(method, methods)
            if desc is None:
                print(f'  >> warning: skipping {translator.signature(method)}')
                continue
            descriptors.append(desc)

        groups, ctor = OverloadGrouper(config.js_class_name, translator.helper_names()).group(descriptors)
        enums = EnumGenerator().collect(descriptors)

        plan = ModulePlan(
            class_name=class_node.qualified_name,
            js_class_name=config.js_class_name,
            header_line=config.header_line,
            destructor=translator.create_destructor(),
            native_wrapper=translator.create_native_wrapper(groups),
            methods=groups,
            constructor=ctor,
            enums=enums,
        )
        return ModuleAssembler(config.library_name).assemble(plan)

    def emit(self, artifact: ModuleArtifact) -> str:
        """Write the module below the output directory, returns its folder"""
        folder = os.path.join(self.config.output_dir, artifact.folder_name)
        if not self.config.create_files:
            print('Done. Did not store the wrapper on disk.')
            return folder

        os.makedirs(os.path.join(folder, 'lib'), exist_ok=True)
        for rel_path, content in artifact.files().items():
            with open(os.path.join(folder, rel_path), 'w', encoding='utf-8', newline='\n') as f:
                f.write(content)

        print('\nDone. Created wrapper in', folder)
        return folder

    def generate(self) -> ModuleArtifact:
        """Load symbols, build the module and emit it"""
        print(f'=== Generating JerryScript wrapper for {self.config.class_name}:')
        artifact = self.build(self.load_symbols())
        self.emit(artifact)
        return artifact
