"""composerr - Composable, templated and chained errors.

Define error types by stacking small facets over ``ComposableError``,
then construct them with whatever you have at hand: a cause, a message
template, properties.

    from composerr import http_error, namespaced

    class UserNotFound(namespaced("Users", http_error(404))):
        pass

    err = UserNotFound(cause, "User ${user} not found", {"user": "ana"})
    err.name          # 'Users.UserNotFound'
    err.message       # 'User ana not found'
    err.to_payload()  # {'error': 'Users.UserNotFound', 'message': 'User ana not found'}
"""

__version__ = "0.1.0"
__description__ = "Composable, templated and causally-chained errors"

from composerr.arguments import ErrorArguments, normalize_arguments
from composerr.base import ComposableError
from composerr.config import ComposerrConfig, create_default_config, load_config
from composerr.context import configure, get_context, reset_context
from composerr.context import publish as emit
from composerr.context import subscribe as on
from composerr.context import unsubscribe as off
from composerr.events import CREATE_EVENT, EventBus
from composerr.facets import (
    Capability,
    has_capability,
    http_error,
    loggable,
    namespaced,
    notificator,
    serializable,
    server_error,
    with_message,
)

__all__ = [
    "__version__",
    "__description__",
    "ComposableError",
    "ErrorArguments",
    "normalize_arguments",
    "namespaced",
    "serializable",
    "notificator",
    "loggable",
    "with_message",
    "http_error",
    "server_error",
    "Capability",
    "has_capability",
    "on",
    "off",
    "emit",
    "configure",
    "get_context",
    "reset_context",
    "ComposerrConfig",
    "create_default_config",
    "load_config",
    "EventBus",
    "CREATE_EVENT",
]
