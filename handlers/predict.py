# handlers/predict.py
from typing import Any, Dict, Mapping

from handlers.events import parse_body
from handlers.responses import HandlerResult, guarded, to_response
from handlers.runtime import Deps, run_lambda
from models import MessagesRequest


async def predict(event: Mapping[str, Any], deps: Deps) -> HandlerResult:
    async def body():
        request = parse_body(event, MessagesRequest)
        completion = await deps.chatbot.complete(request.messages)
        return {"completion": completion}

    return await guarded("predict", body)


async def handle(event: Mapping[str, Any], deps: Deps) -> Dict[str, Any]:
    return to_response(await predict(event, deps))


def lambda_handler(event, context):
    return run_lambda(handle, event, model=True)
