from __future__ import annotations

"""
Logging Handler Factories.

Builds the stderr and rotating-file handlers used by the CLI and tags
them, so reconfiguration only ever removes handlers this package owns and
leaves handlers installed by a host application alone.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List, Optional

from auxdeps.infra.logging.config import LoggingConfig

# Marks handlers created by this package
_HANDLER_TAG_ATTR: str = "_auxdeps_handler"


# ==============================================================================
# HANDLER TAGGING
# ==============================================================================

def _tag_handler(handler: logging.Handler) -> logging.Handler:
    """Mark a handler as owned by auxdeps and return it."""
    setattr(handler, _HANDLER_TAG_ATTR, True)
    return handler


def _is_our_handler(handler: logging.Handler) -> bool:
    """Check whether a handler was created by this package."""
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


# ==============================================================================
# FACTORIES
# ==============================================================================

def build_sink_handlers(cfg: LoggingConfig, level: int) -> List[logging.Handler]:
    """
    Create the output handlers requested by a configuration.

    Args:
        cfg: Logging configuration.
        level: Numeric threshold applied to every handler.

    Returns:
        List[logging.Handler]: Tagged handlers; empty when all sinks are off.
    """
    sinks: List[logging.Handler] = []

    if cfg.console:
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(level)
        console.setFormatter(logging.Formatter(cfg.console_fmt))
        sinks.append(_tag_handler(console))

    if cfg.log_file:
        rotating = _create_rotating_file_handler(cfg, level)
        if rotating is not None:
            sinks.append(rotating)

    return sinks


def _create_rotating_file_handler(cfg: LoggingConfig, level: int) -> Optional[RotatingFileHandler]:
    """
    Open the rotating log file, creating its directory when needed.

    An unwritable location only costs the file sink: a warning is written
    to stderr and None is returned.
    """
    path = str(cfg.log_file)
    try:
        parent = os.path.dirname(os.path.abspath(path))
        os.makedirs(parent, exist_ok=True)
        fh = RotatingFileHandler(
            path,
            maxBytes=int(cfg.max_bytes),
            backupCount=int(cfg.backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: Cannot open log file '{path}': {e}\n")
        return None

    fh.setLevel(level)
    fh.setFormatter(logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt))
    return _tag_handler(fh)
