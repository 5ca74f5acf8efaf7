"""
wrapper_gen - JerryScript module generation for native C++ classes

Reads the DWARF debug information of a compiled binary (objdump --dwarf=info
output), finds one C++ class and generates a JerryScript module exposing its
public methods, constructor, destructor and enums, plus the build glue to
compile it.
"""

from .symbols import SymbolTree, SymbolNode
from .ir import CONSTRUCTOR, EnumDescriptor, WrapperDescriptor, MethodGroup, ModulePlan, ModuleArtifact
from .types import TypeConverter, TypeHandler, TypeInfo, ConversionContext
from .codegen import CodeGen
from .resolver import ClassNotFoundError, resolve_class, select_methods
from .func import MethodTranslator
from .overload import OverloadGrouper
from .enum import EnumGenerator
from .assembler import AssemblyError, ModuleAssembler
from .config import GeneratorConfig, UsageError
from .generator import Generator

__all__ = [
    'SymbolTree', 'SymbolNode',
    'CONSTRUCTOR', 'EnumDescriptor', 'WrapperDescriptor', 'MethodGroup', 'ModulePlan', 'ModuleArtifact',
    'TypeConverter', 'TypeHandler', 'TypeInfo', 'ConversionContext',
    'CodeGen',
    'ClassNotFoundError', 'resolve_class', 'select_methods',
    'MethodTranslator',
    'OverloadGrouper',
    'EnumGenerator',
    'AssemblyError', 'ModuleAssembler',
    'GeneratorConfig', 'UsageError',
    'Generator',
]
