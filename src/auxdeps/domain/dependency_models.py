from __future__ import annotations

"""
Dependency Node Data Models.

Defines the closed set of immutable node kinds exchanged between the
analysis stages. Every node carries a class-level 'type' discriminant
matching the wire name used by the reactive graph, and compares by value.

Raw kinds are produced by the tree builder; simplified kinds are produced
by the simplifier, the replacers and the flattener.
"""

from dataclasses import dataclass, fields
from typing import Any, ClassVar, Dict, Iterable, List, Optional, Tuple, Union

LiteralValue = Union[str, int, float, bool, None]


class _DependencyContainer:
    """Normalizes the 'dependencies' field of a node into a tuple."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "dependencies", tuple(self.dependencies))  # type: ignore[attr-defined]


# -----------------------------------------------------------------------------
# RAW TREE NODES
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ExpressionDependency(_DependencyContainer):
    """
    Root of an analyzed scope: a whole formula or a nested function body.

    Attributes:
        dependencies: Dependencies of the scope in source order.
    """
    type: ClassVar[str] = "expression"
    dependencies: Tuple["Dependency", ...] = ()


@dataclass(frozen=True)
class LiteralDependency:
    """A literal value appearing in the formula."""
    type: ClassVar[str] = "literal"
    value: LiteralValue


@dataclass(frozen=True)
class MemberDependency:
    """
    An identifier, optionally accessed off another node.

    Attributes:
        identifier: The accessed name.
        object: The node the name is read from, or None for a free name.
    """
    type: ClassVar[str] = "member"
    identifier: str
    object: Optional["Dependency"] = None


@dataclass(frozen=True)
class CallDependency(_DependencyContainer):
    """
    A function invocation.

    Attributes:
        identifier: The callee, usually a member chain.
        dependencies: The call arguments, each analyzed independently.
    """
    type: ClassVar[str] = "call"
    identifier: "Dependency"
    dependencies: Tuple["Dependency", ...] = ()


@dataclass(frozen=True)
class TagDependency(_DependencyContainer):
    """A '#name(...)' tag query, or a tag read resolved from a built-in."""
    type: ClassVar[str] = "tag"
    name: str
    dependencies: Tuple["Dependency", ...] = ()


@dataclass(frozen=True)
class FileDependency(_DependencyContainer):
    """A '@name(...)' bot query, or a bot lookup resolved from a built-in."""
    type: ClassVar[str] = "file"
    name: str
    dependencies: Tuple["Dependency", ...] = ()


# -----------------------------------------------------------------------------
# SIMPLIFIED NODES
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FunctionDependency(_DependencyContainer):
    """A simplified call, named by the dotted path of its callee."""
    type: ClassVar[str] = "function"
    name: str
    dependencies: Tuple["Dependency", ...] = ()


@dataclass(frozen=True)
class TagValueDependency(_DependencyContainer):
    """A read of one tag on the bots described by its dependencies."""
    type: ClassVar[str] = "tag_value"
    name: str
    dependencies: Tuple["Dependency", ...] = ()


@dataclass(frozen=True)
class ThisDependency:
    """A reference to the implicit receiver of the formula."""
    type: ClassVar[str] = "this"


@dataclass(frozen=True)
class AllDependency:
    """Marks a formula that may depend on any tag of any bot."""
    type: ClassVar[str] = "all"


@dataclass(frozen=True)
class SimpleMemberDependency:
    """A collapsed member chain, named by its dotted path."""
    type: ClassVar[str] = "member"
    name: str


Dependency = Union[
    ExpressionDependency,
    LiteralDependency,
    MemberDependency,
    CallDependency,
    TagDependency,
    FileDependency,
    FunctionDependency,
    TagValueDependency,
    ThisDependency,
    AllDependency,
    SimpleMemberDependency,
]

DependencyList = List[Dependency]


# -----------------------------------------------------------------------------
# SERIALIZATION
# -----------------------------------------------------------------------------

def node_to_dict(node: Dependency) -> Dict[str, Any]:
    """
    Render a node in its wire shape ('type' first, then its fields).

    Nested nodes are converted recursively and dependency tuples become lists.

    Args:
        node: Any dependency node.

    Returns:
        Dict[str, Any]: JSON-compatible representation of the node.
    """
    out: Dict[str, Any] = {"type": node.type}
    for f in fields(node):
        value = getattr(node, f.name)
        if f.name == "dependencies":
            out[f.name] = nodes_to_dicts(value)
        elif f.name in ("object", "identifier") and not isinstance(value, str):
            out[f.name] = None if value is None else node_to_dict(value)
        else:
            out[f.name] = value
    return out


def nodes_to_dicts(nodes: Iterable[Dependency]) -> List[Dict[str, Any]]:
    """Render a sequence of nodes with node_to_dict()."""
    return [node_to_dict(n) for n in nodes]
