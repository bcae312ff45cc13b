"""Base error type for composerr.

``ComposableError`` is a regular ``Exception`` that adds:

- flexible constructor arguments (see ``composerr.arguments``)
- a cause link, mirrored to ``__cause__`` for exception causes
- a message template rendered lazily against the error's own properties
- an identity (``name``) taken from the most specific declared class

Basic usage:
    class UserNotFound(ComposableError):
        pass

    err = UserNotFound(cause, "User ${user} not found", {"user": "ana"})
    err.message      # 'User ana not found'
    err.user         # 'ana'
    err.cause()      # cause

Nothing in this module raises while building or rendering an error; bad
input degrades to default values.
"""

import logging
import os
import traceback
from collections.abc import Mapping
from typing import Any, ClassVar, Dict, FrozenSet, Optional

from .arguments import ErrorArguments, normalize_arguments
from .config import ComposerrConfig
from .context import get_context
from .templating import RenderContext

logger = logging.getLogger(__name__)

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__)) + os.sep

# Never resolved from the instance while rendering, they render the message
_NOT_RENDERABLE = frozenset({"message", "stack"})


def _capture_stack() -> traceback.StackSummary:
    """Capture the creation stack without frames from this package."""
    frames = traceback.StackSummary.extract(traceback.walk_stack(None), lookup_lines=False)
    frames.reverse()
    return traceback.StackSummary.from_list(
        [frame for frame in frames if not frame.filename.startswith(_PACKAGE_DIR)]
    )


def _message_of(cause: Any) -> Optional[str]:
    """Get the message of a cause, shown as-is and never rendered."""
    if isinstance(cause, ComposableError):
        text = cause.message
    elif isinstance(cause, BaseException):
        text = str(cause)
    elif isinstance(cause, Mapping) and cause.get("message") is not None:
        text = str(cause["message"])
    else:
        return None
    return text or None


def declared_name(cls: type) -> Optional[str]:
    """Get the identity an error class declares, if any.

    A ``fixed_name`` anywhere in the hierarchy wins. Otherwise the nearest
    class that was not generated by a facet gives its name. The base class
    itself declares nothing.
    """
    fixed = getattr(cls, "fixed_name", None)
    if fixed:
        return fixed
    for klass in cls.__mro__:
        if klass is ComposableError:
            return None
        if issubclass(klass, ComposableError) and not klass.__dict__.get("_facet", False):
            return klass.__name__
    return None


class ComposableError(Exception):
    """Base class for every composerr error."""

    # Family marker, testable without isinstance checks
    is_composerr: ClassVar[bool] = True
    capabilities: ClassVar[FrozenSet[str]] = frozenset()
    default_template: ClassVar[Optional[str]] = None
    fixed_name: ClassVar[Optional[str]] = None

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args)
        arguments = normalize_arguments(*args, **kwargs)
        config = get_context().config

        self._cause = arguments.cause
        if isinstance(arguments.cause, BaseException):
            self.__cause__ = arguments.cause

        self._name = declared_name(type(self))
        self._properties = arguments.merged_properties()
        self._literal = False
        self._template = self._initial_template(arguments, config)
        self._stack = _capture_stack()

    def _initial_template(self, arguments: ErrorArguments, config: ComposerrConfig) -> str:
        if arguments.template is not None:
            return arguments.template
        if self.default_template is not None:
            return self.default_template
        from_cause = _message_of(arguments.cause)
        if from_cause is not None:
            # Already rendered by whoever produced it
            self._literal = True
            return from_cause
        return config.default_message

    # Named constructors

    @classmethod
    def from_message(cls, message: str, *properties: Any, **kwargs: Any) -> "ComposableError":
        return cls(ErrorArguments.from_message(message, *properties, **kwargs))

    @classmethod
    def from_cause(cls, cause: Any, *properties: Any, **kwargs: Any) -> "ComposableError":
        return cls(ErrorArguments.from_cause(cause, *properties, **kwargs))

    @classmethod
    def from_cause_and_message(cls, cause: Any, message: str, *properties: Any,
                               **kwargs: Any) -> "ComposableError":
        return cls(ErrorArguments.from_cause_and_message(cause, message, *properties, **kwargs))

    @classmethod
    def from_properties(cls, *properties: Any, **kwargs: Any) -> "ComposableError":
        return cls(ErrorArguments.from_properties(*properties, **kwargs))

    # Accessors

    @property
    def name(self) -> str:
        """Identity of the error, namespace included."""
        return self.__dict__.get("_name") or get_context().config.fallback_name

    def cause(self) -> Any:
        """Get the cause given at construction (None if there was none)."""
        return self.__dict__.get("_cause")

    @property
    def properties(self) -> Dict[str, Any]:
        """Constructor properties followed by public attributes set on the instance."""
        merged = dict(self.__dict__.get("_properties", {}))
        for key, value in self.__dict__.items():
            if not key.startswith("_"):
                merged[key] = value
        return merged

    @property
    def template(self) -> str:
        return self.__dict__.get("_template", "")

    @property
    def message(self) -> str:
        return self.render()

    @message.setter
    def message(self, value: Any) -> None:
        # Stores a template, so later property changes still show up
        self._template = "" if value is None else str(value)
        self._literal = False

    def render(self) -> str:
        """Render the stored template against this error.

        A message taken over from the cause is returned as-is.
        """
        if self.__dict__.get("_literal", False):
            return self.template.strip()
        return self.parse(self.template)

    def parse(self, template: str) -> str:
        """Render any template against this error without storing it.

        Meant for translated messages: the original template stays in
        place for logging.

        Args:
            template: Template to render

        Returns:
            Rendered text with surrounding whitespace stripped
        """
        template = "" if template is None else str(template)
        try:
            context = RenderContext(self.properties, self, _NOT_RENDERABLE)
            return str(get_context().engine.render(template, context)).strip()
        except Exception:
            logger.debug(f"Failed to render template {template!r}", exc_info=True)
            return template.strip()

    @property
    def stack(self) -> str:
        """Identity and message followed by the traceback.

        Uses the raise traceback when the error has been raised, the
        creation stack otherwise.
        """
        if self.__traceback__ is not None:
            frames = traceback.format_tb(self.__traceback__)
        else:
            summary = self.__dict__.get("_stack")
            frames = summary.format() if summary is not None else []
        return f"{self.name}: {self.message}\n" + "".join(frames)

    def __getattr__(self, key: str) -> Any:
        properties = self.__dict__.get("_properties")
        if properties is not None and key in properties:
            return properties[key]
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {key!r}")

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        # Stored template, rendering here could recurse through the template
        return f"{self.name}({self.template!r})"
