# handlers/events.py
import base64
import json
from typing import Any, Dict, Mapping, Type, TypeVar

from pydantic import BaseModel, ValidationError

from exceptions import BadRequestError

T = TypeVar("T", bound=BaseModel)


def path_parameter(event: Mapping[str, Any], name: str) -> str:
    params = event.get("pathParameters") or {}
    value = params.get(name)
    if not isinstance(value, str) or not value.strip():
        raise BadRequestError(f"missing path parameter '{name}'")
    return value


def json_body(event: Mapping[str, Any], optional: bool = False) -> Dict[str, Any]:
    raw = event.get("body")
    if raw is None or raw == "":
        if optional:
            return {}
        raise BadRequestError("missing request body")
    if event.get("isBase64Encoded"):
        try:
            raw = base64.b64decode(raw).decode("utf-8")
        except (ValueError, UnicodeDecodeError) as e:
            raise BadRequestError(f"undecodable body: {e}") from e
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise BadRequestError(f"invalid JSON body: {e}") from e
    if not isinstance(data, dict):
        raise BadRequestError("request body must be a JSON object")
    return data


def parse_body(event: Mapping[str, Any], model: Type[T], optional: bool = False) -> T:
    try:
        return model.model_validate(json_body(event, optional=optional))
    except ValidationError as e:
        raise BadRequestError(f"invalid body: {e.error_count()} error(s)") from e
