from __future__ import annotations

"""
auxdeps: static dependency analysis for bot formulas.
"""

from auxdeps.dependencies import (
    AUX_REPLACEMENTS,
    calculate_aux_dependencies,
    calculate_flat_aux_dependencies,
    dependency_tree,
    flatten,
    get_member_name,
    register_builtin,
    replace_aux_dependencies,
    replace_dependencies,
    simplify,
)
from auxdeps.domain.dependency_models import (
    AllDependency,
    CallDependency,
    Dependency,
    ExpressionDependency,
    FileDependency,
    FunctionDependency,
    LiteralDependency,
    MemberDependency,
    SimpleMemberDependency,
    TagDependency,
    TagValueDependency,
    ThisDependency,
    node_to_dict,
    nodes_to_dicts,
)
from auxdeps.domain.errors import (
    AmbiguousDependencyError,
    AmbiguousIndexError,
    DependencyError,
    FormulaSyntaxError,
)

__version__ = "0.1.0"

__all__ = [
    "AUX_REPLACEMENTS",
    "AllDependency",
    "AmbiguousDependencyError",
    "AmbiguousIndexError",
    "CallDependency",
    "Dependency",
    "DependencyError",
    "ExpressionDependency",
    "FileDependency",
    "FormulaSyntaxError",
    "FunctionDependency",
    "LiteralDependency",
    "MemberDependency",
    "SimpleMemberDependency",
    "TagDependency",
    "TagValueDependency",
    "ThisDependency",
    "calculate_aux_dependencies",
    "calculate_flat_aux_dependencies",
    "dependency_tree",
    "flatten",
    "get_member_name",
    "node_to_dict",
    "nodes_to_dicts",
    "register_builtin",
    "replace_aux_dependencies",
    "replace_dependencies",
    "simplify",
]
