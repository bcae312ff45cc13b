"""Precreated HTTP errors, one per registered status code.

Each class is a ``server_error`` with the code of its reason phrase. Client
errors (4xx) log at ``info`` and server errors (5xx) at ``error``. The
identity is fixed to the class name, so subclasses keep it::

    from composerr.http_errors import NotFound

    class UserNotFound(NotFound):
        pass

    err = UserNotFound("User ${user} not found", {"user": "ana"})
    err.name          # 'NotFound'
    err.status_code   # 404

The 501 class is named ``NotImplemented`` after its reason phrase and
shadows the builtin of the same name. It is left out of ``__all__``; import
it explicitly or use ``error_class_for(501)``.
"""

from typing import Any, Dict, Type

from .base import ComposableError
from .facets import server_error
from .status import ERROR_NAMES, INTERNAL_SERVER_ERROR, coerce_status_code, is_server_error

BY_STATUS_CODE: Dict[int, Type[ComposableError]] = {}


def _precreate(status_code: int) -> Type[ComposableError]:
    name = ERROR_NAMES[status_code]
    level = "error" if is_server_error(status_code) else "info"
    parent = server_error(level=level, status_code=status_code)
    cls = type(name, (parent,), {"fixed_name": name, "__module__": __name__})
    BY_STATUS_CODE[status_code] = cls
    return cls


# Client errors
BadRequest = _precreate(400)
Unauthorized = _precreate(401)
PaymentRequired = _precreate(402)
Forbidden = _precreate(403)
NotFound = _precreate(404)
MethodNotAllowed = _precreate(405)
NotAcceptable = _precreate(406)
ProxyAuthenticationRequired = _precreate(407)
RequestTimeout = _precreate(408)
Conflict = _precreate(409)
Gone = _precreate(410)
LengthRequired = _precreate(411)
PreconditionFailed = _precreate(412)
RequestEntityTooLarge = _precreate(413)
RequestUriTooLarge = _precreate(414)
UnsupportedMediaType = _precreate(415)
RequestedRangeNotSatisfiable = _precreate(416)
ExpectationFailed = _precreate(417)
ImATeapot = _precreate(418)
UnprocessableEntity = _precreate(422)
Locked = _precreate(423)
FailedDependency = _precreate(424)
UnorderedCollection = _precreate(425)
UpgradeRequired = _precreate(426)
PreconditionRequired = _precreate(428)
TooManyRequests = _precreate(429)
RequestHeaderFieldsTooLarge = _precreate(431)
UnavailableForLegalReasons = _precreate(451)

# Server errors
InternalServerError = _precreate(500)
NotImplemented = _precreate(501)
BadGateway = _precreate(502)
ServiceUnavailable = _precreate(503)
GatewayTimeout = _precreate(504)
HttpVersionNotSupported = _precreate(505)
VariantAlsoNegotiates = _precreate(506)
InsufficientStorage = _precreate(507)
BandwidthLimitExceeded = _precreate(509)
NotExtended = _precreate(510)
NetworkAuthenticationRequired = _precreate(511)

__all__ = [
    "BY_STATUS_CODE",
    "error_class_for",
    *(cls.__name__ for cls in BY_STATUS_CODE.values() if cls.__name__ != "NotImplemented"),
]


def error_class_for(status_code: Any) -> Type[ComposableError]:
    """Get the precreated class for a status code.

    Args:
        status_code: int or numeric string

    Returns:
        Matching class, InternalServerError for unregistered codes
    """
    code = coerce_status_code(status_code)
    return BY_STATUS_CODE.get(code, BY_STATUS_CODE[INTERNAL_SERVER_ERROR])
