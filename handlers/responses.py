# handlers/responses.py
"""
Result type and response envelope shared by every handler.

A handler body returns a `Success` or a `Failure`; `to_response` turns either
into the `{statusCode, headers, body}` envelope. Failures keep their kind and
cause for logging and tests, but the caller only ever sees a generic message.
"""

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional, Union

from exceptions import BadRequestError, PersistenceError, UpstreamError

logger = logging.getLogger(__name__)

HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
}


class ErrorKind(Enum):
    BAD_REQUEST = "bad_request"
    PERSISTENCE = "persistence"
    UPSTREAM = "upstream"
    INTERNAL = "internal"


STATUS = {
    ErrorKind.BAD_REQUEST: (400, "Bad Request"),
    ErrorKind.PERSISTENCE: (500, "Internal Server Error"),
    ErrorKind.UPSTREAM: (500, "Internal Server Error"),
    ErrorKind.INTERNAL: (500, "Internal Server Error"),
}


@dataclass
class Success:
    payload: Dict[str, Any]
    status_code: int = 200


@dataclass
class Failure:
    kind: ErrorKind
    cause: Optional[BaseException] = None


HandlerResult = Union[Success, Failure]


def classify(error: BaseException) -> ErrorKind:
    if isinstance(error, BadRequestError):
        return ErrorKind.BAD_REQUEST
    if isinstance(error, PersistenceError):
        return ErrorKind.PERSISTENCE
    if isinstance(error, UpstreamError):
        return ErrorKind.UPSTREAM
    return ErrorKind.INTERNAL


def to_response(result: HandlerResult) -> Dict[str, Any]:
    if isinstance(result, Success):
        status_code, body = result.status_code, result.payload
    else:
        status_code, message = STATUS[result.kind]
        body = {"message": message}
    return {
        "statusCode": status_code,
        "headers": dict(HEADERS),
        "body": json.dumps(body),
    }


async def guarded(name: str, body: Callable[[], Awaitable[Dict[str, Any]]]) -> HandlerResult:
    """Run a handler body, collapsing any exception into a Failure."""
    try:
        return Success(await body())
    except Exception as e:
        kind = classify(e)
        if kind is ErrorKind.BAD_REQUEST:
            logger.warning("%s rejected request: %s", name, e)
        else:
            logger.exception("%s failed (%s)", name, kind.value)
        return Failure(kind, e)
