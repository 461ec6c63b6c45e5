# handlers/create_chat.py
from typing import Any, Dict, Mapping

from handlers.events import parse_body
from handlers.responses import HandlerResult, guarded, to_response
from handlers.runtime import Deps, run_lambda
from models import CreateChatRequest


async def create_chat(event: Mapping[str, Any], deps: Deps) -> HandlerResult:
    async def body():
        request = parse_body(event, CreateChatRequest, optional=True)
        chat = await deps.repository.create_chat(request.title)
        return {"chat": chat.model_dump(mode="json", by_alias=True)}

    return await guarded("create_chat", body)


async def handle(event: Mapping[str, Any], deps: Deps) -> Dict[str, Any]:
    return to_response(await create_chat(event, deps))


def lambda_handler(event, context):
    return run_lambda(handle, event, store=True)
