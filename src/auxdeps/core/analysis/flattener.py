from __future__ import annotations

"""
Dependency Flattener.

Expands nested dependency lists into one pre-order sequence so the
reactive graph can index every entry linearly.
"""

from typing import Iterable

from auxdeps.domain.dependency_models import Dependency, DependencyList


def flatten(nodes: Iterable[Dependency]) -> DependencyList:
    """
    Flatten dependencies in pre-order.

    Each node is emitted unchanged and immediately followed by the
    flattened form of its own dependencies.

    Args:
        nodes: Simplified or replaced dependencies.

    Returns:
        DependencyList: The flat sequence.
    """
    out: DependencyList = []
    for node in nodes:
        out.append(node)
        children = getattr(node, "dependencies", None)
        if children:
            out.extend(flatten(children))
    return out
