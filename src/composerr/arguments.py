"""Constructor argument normalization.

Every error class accepts the same loose call shapes::

    MyError()
    MyError("Message ${id}", {"id": 12})
    MyError(cause)
    MyError(cause, "Message", {"id": 12})
    MyError({"id": 12, "message": "Message ${id}"})
    MyError("Message ${id}", id=12)

``normalize_arguments`` resolves them into an ``ErrorArguments`` value.
Callers that prefer an explicit shape build one with the ``from_*``
constructors and pass it as the only positional argument.
"""

import logging
import numbers
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

MESSAGE_KEY = "message"


@dataclass(frozen=True)
class ErrorArguments:
    """Canonical form of error constructor arguments."""
    cause: Any = None
    template: Optional[str] = None
    properties: Tuple[Any, ...] = field(default_factory=tuple)

    @classmethod
    def from_message(cls, message: str, *properties: Any, **kwargs: Any) -> "ErrorArguments":
        return cls(template=str(message), properties=_with_kwargs(properties, kwargs))

    @classmethod
    def from_cause(cls, cause: Any, *properties: Any, **kwargs: Any) -> "ErrorArguments":
        return cls(cause=cause, template=_message_from(kwargs), properties=_with_kwargs(properties, kwargs))

    @classmethod
    def from_cause_and_message(cls, cause: Any, message: str, *properties: Any,
                               **kwargs: Any) -> "ErrorArguments":
        return cls(cause=cause, template=str(message), properties=_with_kwargs(properties, kwargs))

    @classmethod
    def from_properties(cls, *properties: Any, **kwargs: Any) -> "ErrorArguments":
        """Build from property mappings; a ``message`` key becomes the template."""
        entries = _with_kwargs(properties, kwargs)
        template = _message_from(entries[0]) if entries else None
        if template is None:
            template = _message_from(kwargs)
        return cls(template=template, properties=entries)

    def merged_properties(self) -> Dict[str, Any]:
        """Merge the property entries into one ordered dict.

        Strings are stored under their position, mappings are merged with
        last-write-wins. The ``message`` key is consumed as template and never
        kept as a property.
        """
        merged: Dict[str, Any] = {}
        for index, entry in enumerate(self.properties):
            if isinstance(entry, str):
                merged[str(index)] = entry
            elif isinstance(entry, Mapping):
                for key, value in entry.items():
                    merged[str(key)] = value
            elif entry is not None:
                logger.debug(f"Ignoring property entry of type {type(entry).__name__}")
        merged.pop(MESSAGE_KEY, None)
        return merged


def _with_kwargs(properties: Tuple[Any, ...], kwargs: Dict[str, Any]) -> Tuple[Any, ...]:
    return tuple(properties) + ((dict(kwargs),) if kwargs else ())


def _message_from(entry: Any) -> Optional[str]:
    if isinstance(entry, Mapping) and entry.get(MESSAGE_KEY) is not None:
        return str(entry[MESSAGE_KEY])
    return None


def is_error_like(value: Any) -> bool:
    return isinstance(value, BaseException)


def normalize_arguments(*args: Any, **kwargs: Any) -> ErrorArguments:
    """Resolve loose constructor arguments into ``ErrorArguments``.

    Precedence:

    1. An exception first, or a string second: the first argument is the
       cause and the rest shift left.
    2. A leading string is the template; the rest are property entries.
    3. A leading mapping starts the property entries; its ``message`` key,
       if any, is the template.
    4. A leading number is stringified into the template.

    Anything else leaves the template unresolved and adds no properties.
    Keyword arguments are merged as a final property entry; a ``message``
    keyword is the template when none was resolved above. Never raises.
    """
    if len(args) == 1 and isinstance(args[0], ErrorArguments):
        given = args[0]
        if kwargs:
            template = given.template if given.template is not None else _message_from(kwargs)
            return replace(given, template=template, properties=_with_kwargs(given.properties, kwargs))
        return given

    cause = None
    rest = args
    if args and (is_error_like(args[0]) or (len(args) > 1 and isinstance(args[1], str))):
        cause = args[0]
        rest = args[1:]

    template = None
    properties: Tuple[Any, ...] = ()
    if rest:
        first = rest[0]
        if isinstance(first, str):
            template = first
            properties = tuple(rest[1:])
        elif isinstance(first, Mapping):
            template = _message_from(first)
            properties = tuple(rest)
        elif isinstance(first, numbers.Number):
            template = str(first)
        elif first is not None:
            logger.debug(f"Unsupported leading argument of type {type(first).__name__}")

    if template is None:
        template = _message_from(kwargs)
    return ErrorArguments(cause=cause, template=template, properties=_with_kwargs(properties, kwargs))
