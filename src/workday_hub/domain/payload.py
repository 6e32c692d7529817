"""
Closed value tree for SOAP request bodies.

Request bodies are built from three node kinds only:

- ``Scalar``: a leaf value, optionally carrying XML attributes
  (``<wd:ID wd:type="Employee_ID">5001</wd:ID>``)
- ``Fields``: ordered named children of a complex element
- ``Items``: a repeated element

``to_zeep`` turns a tree into the dict/list arguments zeep serializes against
the WSDL. Leaves with attributes become ``{"_value_1": value, **attributes}``,
which is how zeep addresses simple content with attributes.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Iterator, Optional, Tuple, Union

ScalarValue = Union[str, bool, int, Decimal, bytes]

SIMPLE_CONTENT_KEY = "_value_1"


@dataclass(frozen=True)
class Scalar:
    value: ScalarValue
    attributes: Tuple[Tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.value, (str, bool, int, Decimal, bytes)):
            raise TypeError(
                f"Unsupported scalar value type: {type(self.value).__name__}"
            )

    @classmethod
    def of(cls, value: ScalarValue, **attributes: str) -> "Scalar":
        return cls(value, tuple(attributes.items()))

    def attribute(self, name: str) -> Optional[str]:
        for key, value in self.attributes:
            if key == name:
                return value
        return None


@dataclass(frozen=True)
class Fields:
    entries: Tuple[Tuple[str, "Node"], ...] = ()

    def __post_init__(self) -> None:
        seen = set()
        for name, node in self.entries:
            if not name:
                raise ValueError("Field names must be non-empty")
            if name in seen:
                raise ValueError(f"Duplicate field name: {name}")
            if not isinstance(node, (Scalar, Fields, Items)):
                raise TypeError(f"Field {name!r} is not a payload node")
            seen.add(name)

    @classmethod
    def of(cls, **children: Optional["NodeLike"]) -> "Fields":
        """
        Build fields from keyword arguments, keeping their order.

        ``None`` children are dropped so optional schema elements the caller
        did not supply are simply omitted; plain values become ``Scalar``.
        """
        return cls(
            tuple(
                (name, as_node(child))
                for name, child in children.items()
                if child is not None
            )
        )

    def with_field(self, name: str, node: "NodeLike") -> "Fields":
        """Return a copy with ``name`` appended (or replaced in place)."""
        new_node = as_node(node)
        if name in self:
            return Fields(
                tuple(
                    (key, new_node if key == name else value)
                    for key, value in self.entries
                )
            )
        return Fields(self.entries + ((name, new_node),))

    def get(self, name: str) -> Optional["Node"]:
        for key, value in self.entries:
            if key == name:
                return value
        return None

    def names(self) -> Tuple[str, ...]:
        return tuple(key for key, _ in self.entries)

    def __getitem__(self, name: str) -> "Node":
        node = self.get(name)
        if node is None:
            raise KeyError(name)
        return node

    def __contains__(self, name: object) -> bool:
        return any(key == name for key, _ in self.entries)

    def __iter__(self) -> Iterator[Tuple[str, "Node"]]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class Items:
    values: Tuple["Node", ...] = ()

    def __post_init__(self) -> None:
        for node in self.values:
            if not isinstance(node, (Scalar, Fields, Items)):
                raise TypeError("Items may only hold payload nodes")


Node = Union[Scalar, Fields, Items]
NodeLike = Union[Node, ScalarValue]


def as_node(value: NodeLike) -> Node:
    if isinstance(value, (Scalar, Fields, Items)):
        return value
    return Scalar(value)


def to_zeep(node: Node) -> Any:
    """Convert a payload tree to zeep call arguments."""
    if isinstance(node, Scalar):
        if not node.attributes:
            return node.value
        converted: Dict[str, Any] = {SIMPLE_CONTENT_KEY: node.value}
        converted.update(node.attributes)
        return converted
    if isinstance(node, Fields):
        return {name: to_zeep(child) for name, child in node.entries}
    if isinstance(node, Items):
        return [to_zeep(child) for child in node.values]
    raise TypeError(f"Not a payload node: {type(node).__name__}")
