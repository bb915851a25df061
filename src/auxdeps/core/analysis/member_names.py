from __future__ import annotations

"""
Member Name Resolution.

Joins raw member/call/tag/file chains into dotted names.
"""

from typing import List

from auxdeps.domain import constants as const
from auxdeps.domain.dependency_models import (
    CallDependency,
    Dependency,
    FileDependency,
    MemberDependency,
    TagDependency,
)


def get_member_name(node: Dependency) -> str:
    """
    Return the dotted name of a raw chain, read object first.

    A call segment contributes '()' and a tag/file root contributes its own
    name, so 'def().abc' becomes 'def.().abc' and '#tag.abc().def.abc'
    becomes 'tag.abc.def.abc'.

    Args:
        node: A member, call, tag or file node.

    Returns:
        str: The joined name.

    Raises:
        TypeError: If the chain contains a node that has no name.
    """
    parts: List[str] = []
    current = node
    while current is not None:
        if isinstance(current, MemberDependency):
            parts.append(current.identifier)
            current = current.object
        elif isinstance(current, CallDependency):
            parts.append(const.CALL_SEGMENT)
            current = current.identifier
        elif isinstance(current, (TagDependency, FileDependency)):
            parts.append(current.name)
            current = None
        else:
            raise TypeError(f"Cannot resolve a member name through a '{current.type}' node.")

    return ".".join(reversed(parts))
