"""Error serialization.

Two views of an error and its cause chain:

- ``to_display_string``: human readable text with stacks, one ``Caused by:``
  section per cause.
- ``to_plain_object``: structured dict with the error properties and a flat
  ``causes`` list; stacks are left out so it can go to JSON logs.

Both accept plain exceptions as well as composerr errors. Chains are
followed through ``cause()`` for composerr errors and ``__cause__`` for other
exceptions; a cause seen twice ends the walk.
"""

import traceback
from collections.abc import Mapping
from typing import Any, Dict, Iterator, List

from pydantic import BaseModel, ConfigDict, Field

CAUSED_BY = "Caused by: "


class CauseRecord(BaseModel):
    """Structured description of one error in a chain."""
    model_config = ConfigDict(extra="allow")

    message: str
    name: str
    constructor: str


class ErrorRecord(CauseRecord):
    """Structured description of an error and everything it wraps."""
    causes: List[CauseRecord] = Field(default_factory=list)


def _is_composerr(error: Any) -> bool:
    return bool(getattr(error, "is_composerr", False))


def _next_cause(error: Any) -> Any:
    if _is_composerr(error):
        return error.cause()
    if isinstance(error, BaseException):
        return error.__cause__
    return None


def iter_causes(error: Any) -> Iterator[Any]:
    """Yield each cause of an error, nearest first."""
    seen = {id(error)}
    cause = _next_cause(error)
    while cause is not None and id(cause) not in seen:
        seen.add(id(cause))
        yield cause
        cause = _next_cause(cause)


def _is_extra(key: str) -> bool:
    # Record fields win over same-named properties; private keys stay out
    return not key.startswith("_") and key not in ErrorRecord.model_fields


def _record_fields(error: Any) -> Dict[str, Any]:
    if _is_composerr(error):
        fields = {key: value for key, value in error.properties.items() if _is_extra(key)}
        fields.update(message=error.message, name=error.name, constructor=type(error).__name__)
        return fields
    if isinstance(error, BaseException):
        return {"message": str(error), "name": type(error).__name__, "constructor": type(error).__name__}
    if isinstance(error, Mapping):
        fields = {str(key): value for key, value in error.items() if _is_extra(str(key))}
        fields.update(message=str(error.get("message", "")), name=type(error).__name__,
                      constructor=type(error).__name__)
        return fields
    return {"message": str(error), "name": type(error).__name__, "constructor": type(error).__name__}


def to_record(error: Any) -> ErrorRecord:
    """Build the structured record of an error and its causes."""
    causes = [CauseRecord(**_record_fields(cause)) for cause in iter_causes(error)]
    return ErrorRecord(causes=causes, **_record_fields(error))


def to_plain_object(error: Any) -> Dict[str, Any]:
    """Describe an error as a plain dict (no stacks).

    Example:
        {"message": "Something went wrong", "name": "FatalError",
         "constructor": "FatalError",
         "causes": [{"message": "ENOENT", "name": "OSError", "constructor": "OSError"}]}

    ``causes`` is omitted when the error has none.
    """
    record = to_record(error)
    return record.model_dump(exclude={"causes"} if not record.causes else None)


def _describe(error: Any) -> str:
    if _is_composerr(error):
        return error.stack
    if isinstance(error, BaseException):
        text = "".join(traceback.format_exception_only(type(error), error))
        if error.__traceback__ is not None:
            text += "".join(traceback.format_tb(error.__traceback__))
        return text
    return f"{type(error).__name__}: {error!r}\n"


def to_display_string(error: Any) -> str:
    """Describe an error and its causes as text, stacks included."""
    sections = [_describe(error)]
    sections.extend(CAUSED_BY + _describe(cause) for cause in iter_causes(error))
    return "".join(section if section.endswith("\n") else section + "\n" for section in sections).rstrip("\n")
