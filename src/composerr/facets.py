"""Facets: class factories that add one capability to an error class.

Each facet takes its settings plus an optional base class (default
``ComposableError``) and returns a new subclass, so facets nest in any order::

    class UserNotFound(namespaced("Users", loggable("info", http_error(404)))):
        pass

Every generated class keeps the ``(*args, **kwargs)`` constructor of the base,
so argument parsing is identical whatever the nesting. Generated classes are
marked as facets and never give their own name to an error's identity.

Use ``notificator`` outermost when the announced instance should already
carry the behavior of every facet below it. Stacking it twice still announces
each instance once.
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional, Type

from . import serialization
from .base import ComposableError
from .context import get_context
from .events import CREATE_EVENT
from .status import (
    INTERNAL_SERVER_ERROR,
    coerce_status_code,
    error_name,
    is_server_error,
    reason_phrase,
)

logger = logging.getLogger(__name__)


class Capability(str, Enum):
    """Capabilities a facet adds to an error class."""
    NAMESPACED = "namespaced"
    SERIALIZABLE = "serializable"
    NOTIFICATOR = "notificator"
    LOGGABLE = "loggable"
    WITH_MESSAGE = "with_message"
    HTTP = "http"


def has_capability(error: Any, capability: Capability) -> bool:
    """Check a capability on an error instance or class, composerr or not."""
    return capability in getattr(error, "capabilities", ())


def _resolve_base(base: Optional[type]) -> Type[ComposableError]:
    if base is None:
        return ComposableError
    if not (isinstance(base, type) and issubclass(base, ComposableError)):
        raise TypeError(f"Facet base must be a ComposableError subclass, got {base!r}")
    return base


def _finish(cls: type, parent: type, capability: Capability, label: str) -> type:
    cls._facet = True
    cls.capabilities = parent.capabilities | {capability}
    cls.__name__ = cls.__qualname__ = f"{label}[{parent.__name__}]"
    return cls


def namespaced(name: str, base: Optional[type] = None) -> Type[ComposableError]:
    """Prefix the identity of errors with a namespace.

    Example:
        class FatalError(namespaced("Server")):
            pass

        err = FatalError("Something went wrong")
        err.namespace  # 'Server'
        err.name       # 'Server.FatalError'
    """
    parent = _resolve_base(base)

    class Namespaced(parent):
        def __init__(self, *args: Any, **kwargs: Any) -> None:
            super().__init__(*args, **kwargs)
            current = self.__dict__.get("_name")
            self._name = f"{name}.{current}" if current else name

        @property
        def namespace(self) -> str:
            return name

    return _finish(Namespaced, parent, Capability.NAMESPACED, f"Namespaced:{name}")


def serializable(base: Optional[type] = None) -> Type[ComposableError]:
    """Add ``to_display_string`` and ``to_plain_object``.

    See ``composerr.serialization`` for the output formats.
    """
    parent = _resolve_base(base)

    class Serializable(parent):
        def to_display_string(self) -> str:
            return serialization.to_display_string(self)

        def to_plain_object(self) -> Dict[str, Any]:
            return serialization.to_plain_object(self)

    return _finish(Serializable, parent, Capability.SERIALIZABLE, "Serializable")


def notificator(base: Optional[type] = None) -> Type[ComposableError]:
    """Publish a ``create`` event with every new instance.

    The event goes to the bus of the runtime context once construction below
    this facet is complete. Subscribe with ``composerr.on("create", handler)``.
    """
    parent = _resolve_base(base)

    class Notificator(parent):
        def __init__(self, *args: Any, **kwargs: Any) -> None:
            # An outer notificator publishes instead of this one
            nested = self.__dict__.get("_notifying", False)
            self._notifying = True
            super().__init__(*args, **kwargs)
            if not nested:
                get_context().events.publish(CREATE_EVENT, self)

    return _finish(Notificator, parent, Capability.NOTIFICATOR, "Notificator")


# Console-style level names and their logging.Logger equivalents
_LEVEL_ALIASES = {"warn": "warning", "fatal": "critical"}


def _level_method(target: Any, level: str):
    method = None
    for name in (_LEVEL_ALIASES.get(level), level):
        if name and method is None:
            method = getattr(target, name, None)
    if method is None:
        logger.debug(f"Logger {target!r} has no '{level}' method, using 'error'")
        method = getattr(target, "error")
    return method


def loggable(level: Optional[str] = None, base: Optional[type] = None) -> Type[ComposableError]:
    """Add ``log()`` and ``level()``.

    ``log()`` calls ``logger.<level>(error)``. The logger is the one passed to
    ``log`` (handy for request-scoped loggers) or the runtime context logger,
    a standard library logger named ``composerr`` unless configured.

    Example:
        class NotFoundError(loggable("info")):
            pass

        NotFoundError("User not found").log()  # logger.info(err)
    """
    parent = _resolve_base(base)
    chosen = level or get_context().config.default_level

    class Loggable(parent):
        def log(self, logger: Any = None) -> Any:
            target = logger if logger is not None else get_context().logger
            return _level_method(target, chosen)(self)

        def level(self) -> str:
            return chosen

    return _finish(Loggable, parent, Capability.LOGGABLE, f"Loggable:{chosen}")


def with_message(template: Optional[str], base: Optional[type] = None) -> Type[ComposableError]:
    """Give every instance a default message template.

    A message passed at construction still takes precedence.

    Example:
        class UserNotFound(with_message("The user ${user} does not exist")):
            pass

        UserNotFound({"user": "John"}).message  # 'The user John does not exist'
    """
    parent = _resolve_base(base)

    class WithMessage(parent):
        pass

    if template is not None:
        WithMessage.default_template = str(template)
    return _finish(WithMessage, parent, Capability.WITH_MESSAGE, "WithMessage")


def http_error(status_code: Any = None, base: Optional[type] = None) -> Type[ComposableError]:
    """Add ``status_code`` and ``to_payload()``.

    Status codes of 500 and above get a generic payload so internals never
    reach clients, while the error itself keeps its real message for logs.

    Example:
        class UserNotFound(http_error(404)):
            pass

        err = UserNotFound("The user ${user} does not exist", {"user": "Sarah"})
        err.status_code   # 404
        err.to_payload()  # {'error': 'UserNotFound', 'message': 'The user Sarah does not exist'}

    Args:
        status_code: int or numeric string, defaults to the configured 500
        base: Class to extend
    """
    parent = _resolve_base(base)
    config = get_context().config
    code = coerce_status_code(status_code, config.default_status_code)

    class HTTPError(parent):
        @property
        def status_code(self) -> int:
            return code

        def payload_error_name(self) -> str:
            """Error name safe to send to clients."""
            if is_server_error(code):
                return error_name(INTERNAL_SERVER_ERROR)
            return self.name

        def payload_message(self) -> str:
            """Message safe to send to clients."""
            if is_server_error(code):
                return get_context().config.hidden_message
            return self.message

        def to_payload(self) -> Dict[str, str]:
            return {"error": self.payload_error_name(), "message": self.payload_message()}

    if parent.default_template is None:
        HTTPError.default_template = reason_phrase(code)
    return _finish(HTTPError, parent, Capability.HTTP, f"HTTP:{code}")


def server_error(
    level: Optional[str] = None,
    status_code: Any = None,
    message: Optional[str] = None,
    base: Optional[type] = None,
) -> Type[ComposableError]:
    """Bundle the facets a server error usually needs.

    Same as ``notificator(loggable(level, with_message(message,
    http_error(status_code, base))))``, with ``status_code`` defaulting to the
    configured server error code (503).

    Example:
        class DatabaseDown(server_error()):
            pass

        err = DatabaseDown("Mongo misconfigured")
        err.status_code   # 503
        err.to_payload()  # {'error': 'InternalServerError', 'message': 'An internal server error occurred'}
        err.log()         # logger.error(err)
    """
    if status_code is None:
        status_code = get_context().config.server_error_status_code
    return notificator(loggable(level, with_message(message, http_error(status_code, base))))
