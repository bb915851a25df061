from __future__ import annotations

"""
Logging Core Orchestrator.

Owns the idempotent lifecycle of the logging subsystem. Records are
handed to a QueueHandler on the root logger and written by a
QueueListener thread, so writing the log file never blocks the analysis
running on the caller's thread.

Library modules only create named loggers; configure_logging() is called
by entry points (the CLI) and never on import.
"""

import atexit
import logging
import queue
from logging.handlers import QueueHandler, QueueListener
from typing import Optional

from auxdeps.infra.logging.config import _LEVEL_MAP, LoggingConfig
from auxdeps.infra.logging.handlers import _is_our_handler, _tag_handler, build_sink_handlers

_CONFIGURED_FLAG_ATTR: str = "_auxdeps_configured"
_QUEUE_LISTENER_ATTR: str = "_auxdeps_queue_listener"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Configure the root logger once.

    Repeated calls are no-ops unless 'force' is set, in which case the
    handlers and listener installed by a previous call are replaced.

    Args:
        cfg: Logging configuration.
        force: Re-initialize even if logging is already configured.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()

    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    level = _parse_level(cfg.level)
    root.setLevel(level)

    _remove_our_handlers(root)
    _stop_existing_listener(root)

    sinks = build_sink_handlers(cfg, level)
    if not sinks:
        setattr(root, _CONFIGURED_FLAG_ATTR, True)
        return root

    log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)
    root.addHandler(_tag_handler(QueueHandler(log_queue)))

    listener = QueueListener(log_queue, *sinks, respect_handler_level=True)
    listener.start()
    atexit.register(_safe_stop_listener, listener)

    setattr(root, _QUEUE_LISTENER_ATTR, listener)
    setattr(root, _CONFIGURED_FLAG_ATTR, True)
    return root


def get_logger(name: str) -> logging.Logger:
    """Return the named logger (usually __name__)."""
    return logging.getLogger(name)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _parse_level(level: str) -> int:
    """Convert a level name to its numeric value, defaulting to WARNING."""
    if not level:
        return logging.WARNING
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.WARNING)


def _remove_our_handlers(root: logging.Logger) -> None:
    for h in list(root.handlers):
        if _is_our_handler(h):
            root.removeHandler(h)
            h.close()


def _stop_existing_listener(root: logging.Logger) -> None:
    listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
    if listener is not None:
        _safe_stop_listener(listener)
        setattr(root, _QUEUE_LISTENER_ATTR, None)


def _safe_stop_listener(listener: Optional[QueueListener]) -> None:
    """Stop a listener; stopping one that is already stopped is a no-op."""
    if listener is None:
        return
    if getattr(listener, "_thread", None) is not None:
        listener.stop()
    # Stopping does not close the sinks
    for h in listener.handlers:
        h.close()
