"""Message templating for composerr errors.

Templates use ``${name}`` placeholders. Braced placeholders also accept
dotted paths (``${user.name}``) and positional keys (``${0}``). The engine is
a replaceable collaborator: anything with a ``render(template, context)``
method can be installed through ``composerr.configure(engine=...)``, which is
the hook for i18n or richer template languages.
"""

import string
from collections.abc import Mapping
from typing import Any, Iterator, Protocol


class TemplateEngine(Protocol):
    """Interface every template engine provides."""

    def render(self, template: str, context: Mapping[str, Any]) -> str:
        ...


class ErrorTemplate(string.Template):
    """``string.Template`` variant accepting dotted and numeric braced names."""
    braceidpattern = r'(?a:[_a-z0-9]+(?:\.[_a-z0-9]+)*)'


class _Lenient(Mapping):
    """Resolves missing or None values to an empty string."""

    def __init__(self, context: Mapping[str, Any]):
        self._context = context

    def __getitem__(self, key: str) -> Any:
        try:
            value = self._context[key]
        except KeyError:
            return ""
        return "" if value is None else value

    def __iter__(self) -> Iterator[str]:
        return iter(self._context)

    def __len__(self) -> int:
        return len(self._context)


class StringTemplateEngine:
    """Default engine built on ``string.Template``.

    Unresolved placeholders become empty strings; malformed placeholders
    (a lone ``$``) are left as written.
    """

    def render(self, template: str, context: Mapping[str, Any]) -> str:
        return ErrorTemplate(template).safe_substitute(_Lenient(context))


def _descend(value: Any, key: str) -> Any:
    if isinstance(value, Mapping):
        return value[key]
    if isinstance(value, (list, tuple)) and key.isdigit():
        try:
            return value[int(key)]
        except IndexError:
            raise KeyError(key) from None
    try:
        return getattr(value, key)
    except AttributeError:
        raise KeyError(key) from None


class RenderContext(Mapping):
    """Read-only view used as the template context of an error.

    Keys resolve against ``properties`` first, then against attributes of
    ``subject``. Private names, callables and the names in ``hidden`` are
    never read from the subject.

    Args:
        properties: Property mapping of the error
        subject: The error itself, for self-reference
        hidden: Attribute names that must not be resolved from the subject
    """

    def __init__(self, properties: Mapping[str, Any], subject: Any = None, hidden: frozenset = frozenset()):
        self._properties = properties
        self._subject = subject
        self._hidden = hidden

    def __getitem__(self, key: str) -> Any:
        head, _, rest = key.partition(".")
        value = self._lookup(head)
        if rest:
            for part in rest.split("."):
                value = _descend(value, part)
        return value

    def _lookup(self, key: str) -> Any:
        if key in self._properties:
            return self._properties[key]
        if self._subject is None or key.startswith("_") or key in self._hidden:
            raise KeyError(key)
        try:
            value = getattr(self._subject, key)
        except AttributeError:
            raise KeyError(key) from None
        # Methods stringify through repr(subject), which renders again
        if callable(value):
            raise KeyError(key)
        return value

    def __iter__(self) -> Iterator[str]:
        return iter(self._properties)

    def __len__(self) -> int:
        return len(self._properties)
