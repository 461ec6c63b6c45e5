# handlers/list_chats.py
from typing import Any, Dict, Mapping

from handlers.responses import HandlerResult, guarded, to_response
from handlers.runtime import Deps, run_lambda


async def list_chats(event: Mapping[str, Any], deps: Deps) -> HandlerResult:
    async def body():
        chats = await deps.repository.list_chats()
        return {"chats": [c.model_dump(mode="json", by_alias=True) for c in chats]}

    return await guarded("list_chats", body)


async def handle(event: Mapping[str, Any], deps: Deps) -> Dict[str, Any]:
    return to_response(await list_chats(event, deps))


def lambda_handler(event, context):
    return run_lambda(handle, event, store=True)
