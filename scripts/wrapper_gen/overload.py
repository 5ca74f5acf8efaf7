"""
Overload grouping module

Groups translated methods by name. Each group becomes one dispatcher that
picks the overload by argument count at call time.
"""

from typing import Iterable, Optional

from .codegen import as_identifier
from .ir import CONSTRUCTOR, MethodGroup, WrapperDescriptor


class OverloadGrouper:
    """Partitions wrapper descriptors into method groups"""

    def __init__(self, js_class_name: str, reserved: Iterable[str] = ()):
        self.js_class_name = js_class_name
        self.ident = as_identifier(js_class_name)
        # Other symbols of the translation unit a dispatcher must not redefine
        self.reserved = {f'Construct_{self.ident}', f'Init{self.ident}', *reserved}

    def function_name(self, name: str, taken: Iterable[str] = ()) -> str:
        """C++ name of the generated dispatcher"""
        if name == CONSTRUCTOR:
            return f'Construct_{self.ident}'
        taken = set(taken)
        candidate = f'{self.ident}_{name}'
        while candidate in self.reserved or candidate in taken:
            candidate += '_method'
        return candidate

    def group(self, descriptors: Iterable[Optional[WrapperDescriptor]]) -> tuple[list[MethodGroup], MethodGroup]:
        """Return (method groups in first-seen order, constructor group)"""
        groups: dict[str, MethodGroup] = {}
        for desc in descriptors:
            if desc is None:
                continue
            group = groups.get(desc.name)
            if group is None:
                taken = [g.function_name for g in groups.values()]
                group = MethodGroup(name=desc.name, function_name=self.function_name(desc.name, taken))
                groups[desc.name] = group
            group.overloads.append(desc)

        ctor = groups.pop(CONSTRUCTOR, None)
        if ctor is None:
            print(f'  >> warning: {self.js_class_name} has no public constructor that can be wrapped')
            ctor = MethodGroup(name=CONSTRUCTOR, function_name=self.function_name(CONSTRUCTOR))

        for group in [*groups.values(), ctor]:
            for count in group.ambiguous_counts():
                label = self.js_class_name if group.name == CONSTRUCTOR else f'{self.js_class_name}#{group.name}'
                print(f'  >> warning: {label} has several overloads taking {count} argument(s), '
                      f'the first one wins')

        return list(groups.values()), ctor
