# handlers/list_messages.py
from typing import Any, Dict, Mapping

from handlers.events import path_parameter
from handlers.responses import HandlerResult, guarded, to_response
from handlers.runtime import Deps, run_lambda


async def list_messages(event: Mapping[str, Any], deps: Deps) -> HandlerResult:
    async def body():
        chat_id = path_parameter(event, "chatId")
        messages = await deps.repository.list_messages(chat_id)
        return {"messages": [m.public().model_dump() for m in messages]}

    return await guarded("list_messages", body)


async def handle(event: Mapping[str, Any], deps: Deps) -> Dict[str, Any]:
    return to_response(await list_messages(event, deps))


def lambda_handler(event, context):
    return run_lambda(handle, event, store=True)
