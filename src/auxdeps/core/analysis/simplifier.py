from __future__ import annotations

"""
Dependency Tree Simplifier.

Collapses the raw tree into an ordered list of semantic dependencies:
member chains become dotted 'member' names, calls become named
'function' nodes and nested expressions are spliced into their parent.

A chain that runs through a tag/file query or a call result is broken at
the innermost such node. The properties read after that point belong to a
runtime value, not to a name in scope, so only the breaking node (and the
arguments of the calls made on it) remain.
"""

from dataclasses import replace
from typing import Iterable, List

from auxdeps.core.analysis.member_names import get_member_name
from auxdeps.domain import constants as const
from auxdeps.domain.dependency_models import (
    CallDependency,
    Dependency,
    DependencyList,
    ExpressionDependency,
    FunctionDependency,
    MemberDependency,
    SimpleMemberDependency,
    ThisDependency,
)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def simplify(tree: Dependency) -> DependencyList:
    """
    Simplify a raw dependency tree.

    Args:
        tree: Usually the 'expression' root returned by dependency_tree().

    Returns:
        DependencyList: Simplified dependencies in source order.
    """
    return _simplify(tree)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _simplify(node: Dependency) -> DependencyList:
    if isinstance(node, ExpressionDependency):
        return _simplify_all(node.dependencies)
    if isinstance(node, MemberDependency):
        return _simplify_member(node)
    if isinstance(node, CallDependency):
        return _simplify_call(node)
    if hasattr(node, "dependencies"):
        # tag, file, and already simplified function/tag_value nodes
        return [replace(node, dependencies=_simplify_all(node.dependencies))]
    return [node]


def _simplify_all(nodes: Iterable[Dependency]) -> DependencyList:
    out: DependencyList = []
    for n in nodes:
        out.extend(_simplify(n))
    return out


def _simplify_member(node: MemberDependency) -> DependencyList:
    root = _chain_root(node)
    if isinstance(root, MemberDependency):
        if root.identifier == const.THIS_IDENTIFIER:
            return [ThisDependency()]
        return [SimpleMemberDependency(get_member_name(node))]
    return _simplify(root)


def _simplify_call(node: CallDependency) -> DependencyList:
    args = _simplify_all(node.dependencies)
    callee = node.identifier

    if isinstance(callee, MemberDependency):
        root = _chain_root(callee)
        if isinstance(root, MemberDependency):
            return [FunctionDependency(get_member_name(callee), args)]
        return _simplify(root) + args

    # Calls on arbitrary expressions, e.g. (x => x)(a)
    return _simplify(callee) + args


def _chain_root(node: MemberDependency) -> Dependency:
    """
    Follow a member chain to its root.

    Returns the free-standing member at the start of the chain, or the
    first non-member node (call, tag, file, expression) found on the way.
    """
    current: Dependency = node
    while isinstance(current, MemberDependency) and current.object is not None:
        current = current.object
    return current
