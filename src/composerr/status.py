"""HTTP status registry.

Status codes and reason phrases consumed by the HTTP facet for default
messages and payload hiding, and by the precreated error classes for their
names. The table is a stable contract: changing a phrase renames a class.
"""

import logging
from typing import Any, Dict

from slugify import slugify

logger = logging.getLogger(__name__)

INTERNAL_SERVER_ERROR = 500

# Reason phrases, reproduced verbatim
STATUS_CODES: Dict[int, str] = {
    # Client errors
    400: 'Bad Request',
    401: 'Unauthorized',
    402: 'Payment Required',
    403: 'Forbidden',
    404: 'Not Found',
    405: 'Method Not Allowed',
    406: 'Not Acceptable',
    407: 'Proxy Authentication Required',
    408: 'Request Timeout',
    409: 'Conflict',
    410: 'Gone',
    411: 'Length Required',
    412: 'Precondition Failed',
    413: 'Request Entity Too Large',
    414: 'Request-URI Too Large',
    415: 'Unsupported Media Type',
    416: 'Requested Range Not Satisfiable',
    417: 'Expectation Failed',
    418: "I'm a teapot",
    422: 'Unprocessable Entity',
    423: 'Locked',
    424: 'Failed Dependency',
    425: 'Unordered Collection',
    426: 'Upgrade Required',
    428: 'Precondition Required',
    429: 'Too Many Requests',
    431: 'Request Header Fields Too Large',
    451: 'Unavailable For Legal Reasons',

    # Server errors
    500: 'Internal Server Error',
    501: 'Not Implemented',
    502: 'Bad Gateway',
    503: 'Service Unavailable',
    504: 'Gateway Timeout',
    505: 'HTTP Version Not Supported',
    506: 'Variant Also Negotiates',
    507: 'Insufficient Storage',
    509: 'Bandwidth Limit Exceeded',
    510: 'Not Extended',
    511: 'Network Authentication Required',
}


def reason_phrase(status_code: int) -> str:
    """Get the reason phrase for a status code.

    Args:
        status_code: HTTP status code

    Returns:
        Registered phrase, or the 500 phrase for unknown codes
    """
    return STATUS_CODES.get(status_code, STATUS_CODES[INTERNAL_SERVER_ERROR])


def pascal_case(phrase: str) -> str:
    """Turn a reason phrase into a class name.

    Apostrophes are dropped before slugifying so "I'm a teapot" becomes
    ImATeapot rather than IMATeapot.
    """
    slug = slugify(phrase, replacements=[["'", ""]])
    return "".join(word.capitalize() for word in slug.split("-") if word)


def error_name(status_code: int) -> str:
    """Get the error class name for a status code (InternalServerError if unknown)."""
    return pascal_case(reason_phrase(status_code))


def is_server_error(status_code: int) -> bool:
    return status_code >= INTERNAL_SERVER_ERROR


def coerce_status_code(value: Any, default: int = INTERNAL_SERVER_ERROR) -> int:
    """Coerce a number or numeric string into a status code.

    Unregistered but numeric codes pass through unchanged. Integral floats
    (404.0, "404.0") are accepted. Values that cannot be read as an integer
    fall back to ``default``.

    Args:
        value: Status code as number, numeric string or None
        default: Code used when value is None or not numeric

    Returns:
        Integer status code
    """
    if value is None:
        return default
    if isinstance(value, bool):
        logger.warning(f"Ignoring boolean status code {value!r}, using {default}")
        return default
    if isinstance(value, int):
        return value
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        number = None
    if number is not None and number.is_integer():
        return int(number)
    logger.warning(f"Invalid status code {value!r}, using {default}")
    return default


# Class names by code, computed once
ERROR_NAMES: Dict[int, str] = {code: pascal_case(phrase) for code, phrase in STATUS_CODES.items()}
