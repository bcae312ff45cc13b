"""Process-wide runtime context.

Holds the collaborators errors talk to at call time: configuration, the
default logger used by ``loggable`` errors, the event bus used by
``notificator`` errors and the template engine. The context object is
immutable; ``configure`` swaps in a new one under a lock, so readers always
see a consistent set. Errors never cache it.
"""

import logging
import threading
from dataclasses import dataclass, field, replace
from typing import Any, Optional

from .config import ComposerrConfig
from .events import EventBus
from .templating import StringTemplateEngine, TemplateEngine


def _default_logger() -> logging.Logger:
    return logging.getLogger(ComposerrConfig().logger_name)


@dataclass(frozen=True)
class RuntimeContext:
    """Collaborators shared by every error instance."""
    config: ComposerrConfig = field(default_factory=ComposerrConfig)
    logger: Any = field(default_factory=_default_logger)
    events: EventBus = field(default_factory=EventBus)
    engine: TemplateEngine = field(default_factory=StringTemplateEngine)


_lock = threading.Lock()
_current = RuntimeContext()


def get_context() -> RuntimeContext:
    """Get the active runtime context."""
    return _current


def configure(
    *,
    config: Optional[ComposerrConfig] = None,
    logger: Any = None,
    events: Optional[EventBus] = None,
    engine: Optional[TemplateEngine] = None,
) -> RuntimeContext:
    """Replace one or more collaborators of the runtime context.

    Passing a new ``config`` without a ``logger`` also re-targets the default
    logger to ``config.logger_name`` when the current logger is a standard
    library logger.

    Returns:
        The newly active context
    """
    global _current
    with _lock:
        changes = {}
        if config is not None:
            changes["config"] = config
            if logger is None and isinstance(_current.logger, logging.Logger):
                changes["logger"] = logging.getLogger(config.logger_name)
        if logger is not None:
            changes["logger"] = logger
        if events is not None:
            changes["events"] = events
        if engine is not None:
            changes["engine"] = engine
        _current = replace(_current, **changes)
        return _current


def reset_context() -> RuntimeContext:
    """Restore default collaborators, including a fresh event bus."""
    global _current
    with _lock:
        _current = RuntimeContext()
        return _current


def subscribe(topic: str, handler):
    """Subscribe to an event on the active bus."""
    return get_context().events.subscribe(topic, handler)


def unsubscribe(topic: str, handler) -> bool:
    """Unsubscribe from an event on the active bus."""
    return get_context().events.unsubscribe(topic, handler)


def publish(topic: str, payload: Any) -> int:
    """Publish an event on the active bus."""
    return get_context().events.publish(topic, payload)
