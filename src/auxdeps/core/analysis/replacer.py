from __future__ import annotations

"""
Generic Dependency Replacement.

Rewrites named dependency nodes through a caller-supplied mapping of
dotted name -> producer. Producer output is spliced in place of the
matched node and is never scanned again; unmatched nodes keep their
place and have the same replacement applied to their own dependencies.
"""

from dataclasses import replace
from typing import Callable, Iterable, Mapping, Optional, Sequence

from auxdeps.domain.dependency_models import Dependency, DependencyList

Replacement = Callable[[Dependency], Sequence[Dependency]]
Replacements = Mapping[str, Replacement]


def replace_dependencies(nodes: Iterable[Dependency], replacements: Replacements) -> DependencyList:
    """
    Apply name-based replacements to a list of simplified dependencies.

    Args:
        nodes: Simplified dependencies.
        replacements: Dotted name -> function producing the replacement nodes.

    Returns:
        DependencyList: A new list; the input is left untouched.
    """
    out: DependencyList = []
    for node in nodes:
        producer = _producer_for(node, replacements)
        if producer is not None:
            out.extend(producer(node))
        elif hasattr(node, "dependencies"):
            out.append(replace(node, dependencies=replace_dependencies(node.dependencies, replacements)))
        else:
            out.append(node)
    return out


def _producer_for(node: Dependency, replacements: Replacements) -> Optional[Replacement]:
    name = getattr(node, "name", None)
    if name is None:
        return None
    return replacements.get(name)
