# handlers/create_messages.py
from typing import Any, Dict, Mapping

from handlers.events import parse_body, path_parameter
from handlers.responses import HandlerResult, guarded, to_response
from handlers.runtime import Deps, run_lambda
from models import MessagesRequest


async def create_messages(event: Mapping[str, Any], deps: Deps) -> HandlerResult:
    async def body():
        chat_id = path_parameter(event, "chatId")
        request = parse_body(event, MessagesRequest)
        records = await deps.repository.create_messages(chat_id, request.messages)
        return {"messages": [r.public().model_dump() for r in records]}

    return await guarded("create_messages", body)


async def handle(event: Mapping[str, Any], deps: Deps) -> Dict[str, Any]:
    return to_response(await create_messages(event, deps))


def lambda_handler(event, context):
    return run_lambda(handle, event, store=True)
