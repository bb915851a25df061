from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared pipeline shortcuts used across the analysis unit tests.
3. Root logger cleanup for tests that configure logging.
"""

import logging
import os
import sys
from logging.handlers import QueueListener
from typing import Callable, Iterator, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from auxdeps.dependencies import dependency_tree, replace_aux_dependencies, simplify  # noqa: E402
from auxdeps.infra.logging.core import _CONFIGURED_FLAG_ATTR, _QUEUE_LISTENER_ATTR  # noqa: E402
from auxdeps.infra.logging.handlers import _HANDLER_TAG_ATTR  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def simplified() -> Callable[[str], List]:
    """
    Return a shortcut running dependency_tree() -> simplify().

    Returns:
        Callable[[str], List]: Formula source -> simplified dependencies.
    """
    def run(code: str) -> List:
        return simplify(dependency_tree(code))

    return run


@pytest.fixture
def resolved() -> Callable[[str], List]:
    """
    Return a shortcut running the full pipeline without the fail-open guard.

    Returns:
        Callable[[str], List]: Formula source -> resolved dependencies.
    """
    def run(code: str) -> List:
        return replace_aux_dependencies(simplify(dependency_tree(code)))

    return run


@pytest.fixture
def reset_logging() -> Iterator[None]:
    """Clean up root logger handlers before and after a test."""
    _clear_root_logger()
    yield
    _clear_root_logger()


def _clear_root_logger() -> None:
    root = logging.getLogger()

    listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
    if listener and isinstance(listener, QueueListener):
        if getattr(listener, "_thread", None) is not None:
            listener.stop()
        setattr(root, _QUEUE_LISTENER_ATTR, None)

    # pytest keeps its own capture handlers on the root logger
    for h in list(root.handlers):
        if getattr(h, _HANDLER_TAG_ATTR, False):
            root.removeHandler(h)
            h.close()

    if hasattr(root, _CONFIGURED_FLAG_ATTR):
        delattr(root, _CONFIGURED_FLAG_ATTR)
    root.setLevel(logging.WARNING)
