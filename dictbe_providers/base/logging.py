"""Structured logging for the provider layer.

Every adapter logs through a child of the shared ``providers`` logger
(``providers.openai``, ``providers.anthropic``, ``providers.gemini``). The
shared logger owns the handlers: a stderr handler created on first use and an
optional rotating file handler added by :func:`configure_logger`. Records do
not propagate past ``providers``.

Adapters emit one JSON document per event through
:func:`normalized_log_event`; the keys ``phase`` and ``emitted`` are always
present and failures add ``error_code``.

Environment:
    PROVIDERS_LOG_LEVEL  level name for the shared logger (default INFO)
"""
from __future__ import annotations

import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, List, Optional

from .log_support import JsonFormatter, LogContext

ROOT_LOGGER = "providers"
LEVEL_ENV = "PROVIDERS_LOG_LEVEL"

# Marks handlers owned by this module; the value is the handler role.
_ROLE_ATTR = "_providers_role"
_ROLE_CONSOLE = "console"
_ROLE_FILE = "file"
_READY_ATTR = "_providers_ready"

_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_FILE_MAX_BYTES = 10 * 1024 * 1024
_FILE_BACKUPS = 5

REQUIRED_NORMALIZED_KEYS = ("phase", "emitted", "error_code")


def _parse_level(value: Any, default: int = logging.INFO) -> int:
    """Return a numeric level for ``value`` (an int or a level name); ``default`` when unknown."""
    if isinstance(value, int):
        return value
    if not value:
        return default
    level = logging.getLevelName(str(value).strip().upper())
    return level if isinstance(level, int) else default


def _formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _owned(logger: logging.Logger, *roles: str) -> List[logging.Handler]:
    roles = roles or (_ROLE_CONSOLE, _ROLE_FILE)
    return [h for h in logger.handlers if getattr(h, _ROLE_ATTR, None) in roles]


def _root(json_mode: bool, level: int) -> logging.Logger:
    logger = logging.getLogger(ROOT_LOGGER)
    env_level = os.getenv(LEVEL_ENV)
    if getattr(logger, _READY_ATTR, False):
        # an explicit env level wins over configure_logger
        if env_level:
            logger.setLevel(_parse_level(env_level, logger.level))
        return logger

    logger.setLevel(_parse_level(env_level, level))
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(_formatter(json_mode))
    setattr(console, _ROLE_ATTR, _ROLE_CONSOLE)
    logger.handlers[:] = [console]
    logger.propagate = False
    setattr(logger, _READY_ATTR, True)
    return logger


def get_logger(name: str = ROOT_LOGGER, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return ``name`` wired to the shared ``providers`` handlers.

    Child loggers keep no handlers and inherit the shared level, so each
    record is written exactly once.
    """
    root = _root(json_mode, level)
    if name == ROOT_LOGGER:
        return root
    child = logging.getLogger(name)
    child.setLevel(logging.NOTSET)
    child.propagate = True
    return child


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Reconfigure the shared ``providers`` logger at runtime.

    Parameters
    ----------
    level:
        Numeric level or level name; ``None`` keeps the current level.
    file_path:
        Attach a rotating file handler (10 MB x 5) writing to this path,
        replacing a previous one for another path. ``None`` removes it.
    json_mode:
        JSON or plain-text formatting for the handlers this module owns.

    Handlers added by other code are left untouched.
    """
    logger = get_logger(json_mode=json_mode)
    if level is not None:
        logger.setLevel(_parse_level(level, logger.level))

    fmt = _formatter(json_mode)
    for h in _owned(logger):
        h.setFormatter(fmt)

    target = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    for h in _owned(logger, _ROLE_FILE):
        if target is not None and getattr(h, "baseFilename", None) == target:
            return logger
        logger.removeHandler(h)
        h.close()
    if target is None:
        return logger

    os.makedirs(os.path.dirname(target), exist_ok=True)
    fh = RotatingFileHandler(target, maxBytes=_FILE_MAX_BYTES, backupCount=_FILE_BACKUPS, encoding="utf-8")
    fh.setFormatter(fmt)
    setattr(fh, _ROLE_ATTR, _ROLE_FILE)
    logger.addHandler(fh)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Write ``{"event": event, **ctx, **fields}`` as one JSON message.

    ``None`` field values are dropped unless ``keep_none`` is set.
    """
    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"event": event}
    if ctx is not None:
        payload.update(ctx.to_dict())
    payload.update(fields if keep_none else {k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


def normalized_log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    emitted: int | bool | None = None,
    error_code: str | None = None,
    **extra_fields: Any,
) -> None:
    """Emit an event with the normalized keys.

    ``emitted`` is always written (``null`` when unknown); ``error_code`` is
    written on failures only and raises the level to WARNING. ``None`` extras
    are dropped and extras never replace a normalized key.
    """
    fields: Dict[str, Any] = {"phase": phase, "emitted": emitted}
    if error_code is not None:
        fields["error_code"] = error_code
    for key, value in extra_fields.items():
        if value is not None and key not in fields:
            fields[key] = value
    level = logging.INFO if error_code is None else logging.WARNING
    log_event(logger, event, ctx, level=level, keep_none=True, **fields)


__all__ = [
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
]
