"""
Symbol tree module

Reads and represents the DWARF debug information printed by
`objdump --dwarf=info` as a tree of tagged nodes.
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional
import re

# ' <1><2d>: Abbrev Number: 2 (DW_TAG_class_type)'
_NODE_RE = re.compile(r'^\s*<(\d+)><([0-9a-fA-F]+)>: Abbrev Number: (\d+)(?: \((DW_TAG_\w+)\))?')

# '    <2e>   DW_AT_name        : Led'
_ATTR_RE = re.compile(r'^\s*<[0-9a-fA-F]+>\s+(DW_AT_\w+)\s*: ?(.*)$')

# '(indirect string, offset: 0x5e): on', '(strx1) (offset: 0x10): on'
_STRING_FORM_RE = re.compile(r'^(?:\([^)]*\)\s*)+:\s*')

# '<0x95>'
_REF_RE = re.compile(r'<0x([0-9a-fA-F]+)>')

# '1\t(public)'
_ACCESS_RE = re.compile(r'\((public|protected|private)\)')

# Tags that open a C++ scope for qualified names
SCOPE_TAGS = ('class_type', 'structure_type', 'union_type', 'namespace')


def strip_string_form(value: str) -> str:
    """Remove objdump's string form prefix from an attribute value"""
    return _STRING_FORM_RE.sub('', value).strip()


@dataclass(eq=False)
class SymbolNode:
    """Debugging information entry"""
    tag: str
    offset: int
    depth: int
    attributes: dict[str, str] = field(default_factory=dict)
    children: list['SymbolNode'] = field(default_factory=list)
    parent: Optional['SymbolNode'] = field(default=None, repr=False)

    @property
    def name(self) -> Optional[str]:
        value = self.attributes.get('name')
        if value is None:
            return None
        return strip_string_form(value)

    @property
    def accessibility(self) -> Optional[str]:
        """'public', 'protected', 'private' or None when not recorded"""
        value = self.attributes.get('accessibility')
        if value is None:
            return None
        match = _ACCESS_RE.search(value)
        return match.group(1) if match else None

    @property
    def type_offset(self) -> Optional[int]:
        """Offset of the node referenced by DW_AT_type"""
        value = self.attributes.get('type')
        if value is None:
            return None
        match = _REF_RE.search(value)
        return int(match.group(1), 16) if match else None

    @property
    def is_artificial(self) -> bool:
        return self.attributes.get('artificial', '0').strip().startswith('1')

    @property
    def const_value(self) -> Optional[int]:
        value = self.attributes.get('const_value')
        if value is None:
            return None
        token = value.split()[0]
        try:
            return int(token)
        except ValueError:
            return int(token, 16)

    @property
    def qualified_name(self) -> Optional[str]:
        """Name joined with its enclosing classes and namespaces"""
        if self.name is None:
            return None
        parts = [self.name]
        scope = self.parent
        while scope is not None and scope.tag in SCOPE_TAGS:
            if scope.name:
                parts.append(scope.name)
            scope = scope.parent
        return '::'.join(reversed(parts))

    def children_tagged(self, tag: str) -> list['SymbolNode']:
        return [c for c in self.children if c.tag == tag]


@dataclass
class SymbolTree:
    """Parsed .debug_info section"""
    roots: list[SymbolNode]
    nodes: list[SymbolNode]
    _by_offset: dict[int, SymbolNode] = field(default_factory=dict, repr=False)

    @classmethod
    def load(cls, path: str) -> 'SymbolTree':
        """Load a tree from an objdump output file"""
        with open(path, 'r', encoding='utf-8', errors='replace') as f:
            return cls.parse(f.read())

    @classmethod
    def parse(cls, text: str) -> 'SymbolTree':
        """Parse objdump --dwarf=info text"""
        roots: list[SymbolNode] = []
        nodes: list[SymbolNode] = []
        stack: list[SymbolNode] = []
        current: Optional[SymbolNode] = None

        for line in text.splitlines():
            node_match = _NODE_RE.match(line)
            if node_match:
                depth = int(node_match.group(1))
                tag = node_match.group(4)
                if tag is None:
                    # Abbrev Number: 0 terminates a sibling chain
                    current = None
                    continue

                node = SymbolNode(
                    tag=tag[len('DW_TAG_'):],
                    offset=int(node_match.group(2), 16),
                    depth=depth,
                )
                while stack and stack[-1].depth >= depth:
                    stack.pop()
                if stack:
                    node.parent = stack[-1]
                    stack[-1].children.append(node)
                else:
                    roots.append(node)
                stack.append(node)
                nodes.append(node)
                current = node
                continue

            attr_match = _ATTR_RE.match(line)
            if attr_match and current is not None:
                key = attr_match.group(1)[len('DW_AT_'):]
                current.attributes[key] = attr_match.group(2).rstrip()

        return cls(
            roots=roots,
            nodes=nodes,
            _by_offset={n.offset: n for n in nodes},
        )

    def lookup(self, offset: Optional[int]) -> Optional[SymbolNode]:
        """Get node by absolute offset"""
        if offset is None:
            return None
        return self._by_offset.get(offset)

    def walk(self, tag: Optional[str] = None) -> Iterator[SymbolNode]:
        """Iterate over all nodes in document order"""
        for node in self.nodes:
            if tag is None or node.tag == tag:
                yield node
