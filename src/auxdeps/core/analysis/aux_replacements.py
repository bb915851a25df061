from __future__ import annotations

"""
Built-in Query Function Replacements.

Static registry describing what the platform's built-in query functions
actually read. A call such as getBot("#name", ...) is rewritten into the
file dependency it resolves to, and player.isDesigner() into a read of the
'aux.designers' tag.

Handlers only fire for calls. A bare reference to a built-in (no
parentheses) stays a plain member dependency. New built-ins are added
with the register_builtin() decorator.
"""

import functools
import logging
from dataclasses import replace
from types import MappingProxyType
from typing import Callable, Dict, Iterable, List, Mapping

from auxdeps.core.analysis.replacer import Replacement, replace_dependencies
from auxdeps.domain import constants as const
from auxdeps.domain.dependency_models import (
    AllDependency,
    Dependency,
    DependencyList,
    FileDependency,
    FunctionDependency,
    LiteralDependency,
    TagDependency,
    TagValueDependency,
)
from auxdeps.domain.errors import AmbiguousDependencyError

logger = logging.getLogger(__name__)

Handler = Callable[[FunctionDependency], List[Dependency]]

_REGISTRY: Dict[str, Replacement] = {}

# Read-only view of the registered built-ins
AUX_REPLACEMENTS: Mapping[str, Replacement] = MappingProxyType(_REGISTRY)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def replace_aux_dependencies(nodes: Iterable[Dependency]) -> DependencyList:
    """
    Resolve the built-in query functions of a simplified dependency list.

    Args:
        nodes: Output of simplify().

    Returns:
        DependencyList: Dependencies with built-in calls resolved.

    Raises:
        AmbiguousDependencyError: If a built-in's name argument is not a
            string literal.
    """
    return replace_dependencies(nodes, AUX_REPLACEMENTS)


def register_builtin(*names: str) -> Callable[[Handler], Handler]:
    """
    Register a handler for one or more built-in function names.

    The handler receives the simplified 'function' node and returns the
    nodes that replace it. Other nodes with the same name are passed
    through with their own dependencies resolved.
    """
    def decorator(handler: Handler) -> Handler:
        wrapped = _calls_only(handler)
        for name in names:
            _REGISTRY[name] = wrapped
        return handler

    return decorator


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _calls_only(handler: Handler) -> Replacement:
    @functools.wraps(handler)
    def wrapper(node: Dependency) -> List[Dependency]:
        if isinstance(node, FunctionDependency):
            return handler(node)
        if hasattr(node, "dependencies"):
            return [replace(node, dependencies=replace_aux_dependencies(node.dependencies))]
        return [node]

    return wrapper


def _string_argument(node: FunctionDependency, position: int, strip_hash: bool) -> str:
    """
    Return the string literal at the given argument position.

    Raises:
        AmbiguousDependencyError: If the argument is missing or is not a
            string literal.
    """
    if position >= len(node.dependencies):
        logger.debug(f"{node.name}() called without argument {position + 1}")
        raise AmbiguousDependencyError(node.name, position, "is missing")

    arg = node.dependencies[position]
    if not isinstance(arg, LiteralDependency) or not isinstance(arg.value, str):
        logger.debug(f"{node.name}() argument {position + 1} is not a string literal: {arg!r}")
        raise AmbiguousDependencyError(node.name, position)

    value = arg.value
    if strip_hash and value.startswith(const.TAG_SIGIL):
        value = value[1:]
    return value


# -----------------------------------------------------------------------------
# BOT QUERIES
# -----------------------------------------------------------------------------

@register_builtin(const.GET_BOT, const.GET_BOTS)
def _bot_query(node: FunctionDependency) -> List[Dependency]:
    name = _string_argument(node, 0, strip_hash=True)
    return [FileDependency(name, replace_aux_dependencies(node.dependencies[1:]))]


@register_builtin(const.GET_BOTS_IN_CONTEXT)
def _context_query(node: FunctionDependency) -> List[Dependency]:
    # Context names are matched verbatim
    name = _string_argument(node, 0, strip_hash=False)
    return [FileDependency(name)]


@register_builtin(const.GET_BOTS_IN_STACK, const.GET_NEIGHBORING_BOTS)
def _stack_query(node: FunctionDependency) -> List[Dependency]:
    context = _string_argument(node, 1, strip_hash=False)
    positions = [FileDependency(f"{context}.{suffix}") for suffix in const.STACK_POSITION_SUFFIXES]
    return [FileDependency(context)] + positions


# -----------------------------------------------------------------------------
# TAG QUERIES
# -----------------------------------------------------------------------------

@register_builtin(const.GET_BOT_TAG_VALUES)
def _tag_values_query(node: FunctionDependency) -> List[Dependency]:
    name = _string_argument(node, 0, strip_hash=True)
    return [TagDependency(name, replace_aux_dependencies(node.dependencies[1:]))]


@register_builtin(const.GET_TAG)
def _tag_read(node: FunctionDependency) -> List[Dependency]:
    """One tag_value per tag name, each depending on the bot argument."""
    if not node.dependencies:
        return []

    bots = replace_aux_dependencies(node.dependencies[:1])
    return [
        TagValueDependency(_string_argument(node, position, strip_hash=True), bots)
        for position in range(1, len(node.dependencies))
    ]


# -----------------------------------------------------------------------------
# PLAYER STATE
# -----------------------------------------------------------------------------

@register_builtin(const.PLAYER_HAS_FILE_IN_INVENTORY)
def _inventory_query(node: FunctionDependency) -> List[Dependency]:
    # TODO: narrow to the inventory context tags once they are tracked per user
    return [AllDependency()]


def _state_tag_reader(tag: str) -> Handler:
    def handler(node: FunctionDependency) -> List[Dependency]:
        return [TagDependency(tag)]

    return handler


_PLAYER_STATE_TAGS: Dict[str, str] = {
    const.PLAYER_IS_DESIGNER: const.DESIGNERS_TAG,
    const.PLAYER_GET_MENU_CONTEXT: const.USER_MENU_CONTEXT_TAG,
    const.PLAYER_GET_INVENTORY_CONTEXT: const.USER_INVENTORY_CONTEXT_TAG,
    const.PLAYER_CURRENT_CONTEXT: const.USER_CONTEXT_TAG,
}

for _name, _tag in _PLAYER_STATE_TAGS.items():
    register_builtin(_name)(_state_tag_reader(_tag))
