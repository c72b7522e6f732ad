"""Element tree produced by the XML-subset grammar."""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

Attribute = Tuple[str, str]


@dataclass(frozen=True)
class Element:
    """A single element: name, ordered attributes and ordered children.

    Instances are immutable. Attributes keep source order and may repeat a
    key; nothing here decides which duplicate is authoritative.
    """

    name: str
    attributes: Tuple[Attribute, ...] = ()
    children: Tuple["Element", ...] = ()

    def __post_init__(self) -> None:
        """Validate the name and normalise sequences to tuples."""
        if not self.name:
            raise ValueError("Element name cannot be empty")
        object.__setattr__(
            self, "attributes", tuple((key, value) for key, value in self.attributes)
        )
        object.__setattr__(self, "children", tuple(self.children))

    @property
    def is_leaf(self) -> bool:
        """Check whether the element has no children."""
        return not self.children

    @property
    def element_count(self) -> int:
        """Count this element and all of its descendants."""
        count = 0
        pending = [self]
        while pending:
            node = pending.pop()
            count += 1
            pending.extend(node.children)
        return count

    @property
    def depth(self) -> int:
        """Height of the subtree rooted here (a leaf has depth 1)."""
        deepest = 0
        pending = [(self, 1)]
        while pending:
            node, level = pending.pop()
            deepest = max(deepest, level)
            pending.extend((child, level + 1) for child in node.children)
        return deepest

    def attribute_values(self, key: str) -> List[str]:
        """All values recorded for ``key``, in source order."""
        return [value for name, value in self.attributes if name == key]

    def has_attribute(self, key: str) -> bool:
        return any(name == key for name, _ in self.attributes)

    def iter(self) -> Iterator["Element"]:
        """Iterate over this element and its descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.iter()

    def find(self, name: str) -> Optional["Element"]:
        """Find the first descendant with a matching name."""
        for child in self.children:
            if child.name == name:
                return child

        for child in self.children:
            found = child.find(name)
            if found:
                return found

        return None

    def find_all(self, name: str) -> List["Element"]:
        """Find all descendants with a matching name, in document order."""
        results = []
        for child in self.children:
            if child.name == name:
                results.append(child)
            results.extend(child.find_all(name))
        return results

    def to_dict(self) -> Dict[str, Any]:
        """Convert the subtree to plain lists and dicts (JSON-ready)."""
        return {
            "name": self.name,
            "attributes": [[key, value] for key, value in self.attributes],
            "children": [child.to_dict() for child in self.children],
        }

    def to_xml(self, indent: str = "  ", _level: int = 0) -> str:
        """Render the subtree back into the XML subset it was parsed from."""
        padding = indent * _level
        attributes = "".join(f' {key}="{value}"' for key, value in self.attributes)
        if self.is_leaf:
            return f"{padding}<{self.name}{attributes}/>"

        lines = [f"{padding}<{self.name}{attributes}>"]
        lines.extend(child.to_xml(indent, _level + 1) for child in self.children)
        lines.append(f"{padding}</{self.name}>")
        return "\n".join(lines)
