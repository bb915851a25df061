from __future__ import annotations

"""
Formula Dependency Analysis Facade.

Composes the analysis stages (tree building, simplification, built-in
replacement and flattening) behind the entry points used by the reactive
recompute loop.

calculate_aux_dependencies() is fail-open: a formula that cannot be parsed
or analyzed is reported as having no dependencies instead of raising, so
one malformed formula never stops recomputation of the others. Every other
entry point propagates its errors.
"""

import logging

from auxdeps.core.analysis.aux_replacements import (
    AUX_REPLACEMENTS,
    register_builtin,
    replace_aux_dependencies,
)
from auxdeps.core.analysis.flattener import flatten
from auxdeps.core.analysis.member_names import get_member_name
from auxdeps.core.analysis.replacer import replace_dependencies
from auxdeps.core.analysis.simplifier import simplify
from auxdeps.core.analysis.tree_builder import dependency_tree
from auxdeps.domain.dependency_models import DependencyList

logger = logging.getLogger(__name__)

__all__ = [
    "AUX_REPLACEMENTS",
    "calculate_aux_dependencies",
    "calculate_flat_aux_dependencies",
    "dependency_tree",
    "flatten",
    "get_member_name",
    "register_builtin",
    "replace_aux_dependencies",
    "replace_dependencies",
    "simplify",
]


def calculate_aux_dependencies(code: str) -> DependencyList:
    """
    Compute the resolved dependencies of a formula.

    Runs dependency_tree() -> simplify() -> replace_aux_dependencies().

    Args:
        code: The formula source text.

    Returns:
        DependencyList: The dependencies, or an empty list when the formula
        cannot be parsed or analyzed.
    """
    try:
        tree = dependency_tree(code)
        return replace_aux_dependencies(simplify(tree))
    except Exception as e:
        logger.debug(f"No dependencies for formula {code!r}: {type(e).__name__}: {e}")
        return []


def calculate_flat_aux_dependencies(code: str) -> DependencyList:
    """
    Compute the resolved dependencies of a formula as one flat list.

    Same failure policy as calculate_aux_dependencies().
    """
    return flatten(calculate_aux_dependencies(code))
