"""
IR (Intermediate Representation) module

Records produced by the translation pipeline and consumed by the module
assembler.
"""

from dataclasses import dataclass, field
from typing import Optional

# Reserved descriptor name for constructors. Not a valid C++ identifier, so it
# can never clash with a method name.
CONSTRUCTOR = '<ctor>'


@dataclass(frozen=True)
class EnumDescriptor:
    """Enum referenced by a translated method"""
    name: str
    values: tuple[tuple[str, int], ...]


@dataclass(frozen=True)
class WrapperDescriptor:
    """One translated native method"""
    name: str
    args_count: int
    body: str
    enums: tuple[EnumDescriptor, ...] = ()
    signature: str = ''


@dataclass
class MethodGroup:
    """All overloads sharing one script-visible name"""
    name: str
    function_name: str
    overloads: list[WrapperDescriptor] = field(default_factory=list)

    def ambiguous_counts(self) -> list[int]:
        """Argument counts claimed by more than one overload"""
        seen: set[int] = set()
        dupes: list[int] = []
        for desc in self.overloads:
            if desc.args_count in seen and desc.args_count not in dupes:
                dupes.append(desc.args_count)
            seen.add(desc.args_count)
        return dupes


@dataclass
class ModulePlan:
    """Everything the translation unit is rendered from"""
    class_name: str
    js_class_name: str
    header_line: str
    destructor: Optional[str]
    native_wrapper: Optional[str]
    methods: list[MethodGroup]
    constructor: MethodGroup
    enums: dict[str, tuple[tuple[str, int], ...]]


@dataclass(frozen=True)
class ModuleArtifact:
    """Generated module texts"""
    library_name: str
    cpp: str
    cmake_lists: str
    modules_json: str
    module_cmake: str

    @property
    def folder_name(self) -> str:
        return f'{self.library_name}_module'

    def files(self) -> dict[str, str]:
        """Relative output path -> file content"""
        return {
            f'lib/{self.library_name}_module.cpp': self.cpp,
            'lib/CMakeLists.txt': self.cmake_lists,
            'modules.json': self.modules_json,
            'module.cmake': self.module_cmake,
        }
