"""
Class resolution

Finds the target class in the symbol tree and selects its callable surface.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .symbols import SymbolTree, SymbolNode


class ClassNotFoundError(Exception):
    """The requested class is not in the symbol tree"""

    def __init__(self, class_name: str):
        super().__init__(f"Could not find object '{class_name}'. Are you sure it's linked in?")
        self.class_name = class_name


def resolve_class(tree: 'SymbolTree', class_name: str) -> 'SymbolNode':
    """Return the class_type node named class_name

    The compiler emits one entry per translation unit, some of them only
    forward declarations. The entry with the most children is the complete
    definition; ties keep the first one.
    """
    best = None
    for node in tree.walk('class_type'):
        if node.name != class_name:
            continue
        if best is None or len(node.children) > len(best.children):
            best = node
    if best is None:
        raise ClassNotFoundError(class_name)
    return best


def select_methods(class_node: 'SymbolNode') -> list['SymbolNode']:
    """Public methods of the class, in declaration order"""
    return [c for c in class_node.children
            if c.tag == 'subprogram' and c.accessibility == 'public']
