# handlers/predict_stream.py
"""
Streaming completion.

The request is validated before any chunk is produced, so a bad request is
still answered with a plain envelope. Once streaming has started, failures
surface as an exception from the chunk iterator and the transport decides
how to frame them (the HTTP adapter sends an SSE `error` event).
"""

import logging
from typing import Any, AsyncIterator, Dict, Mapping, Union

from handlers.events import parse_body
from handlers.responses import Failure, classify, guarded, to_response
from handlers.runtime import Deps, run_lambda
from models import MessagesRequest

logger = logging.getLogger(__name__)


async def open_stream(event: Mapping[str, Any], deps: Deps) -> Union[Failure, AsyncIterator[str]]:
    try:
        request = parse_body(event, MessagesRequest)
    except Exception as e:
        logger.warning("predict_stream rejected request: %s", e)
        return Failure(classify(e), e)
    return deps.chatbot.stream(request.messages)


async def handle(event: Mapping[str, Any], deps: Deps) -> Dict[str, Any]:
    """Buffered variant for runtimes that cannot stream a response body."""
    chunks = await open_stream(event, deps)
    if isinstance(chunks, Failure):
        return to_response(chunks)

    async def body():
        return {"completion": "".join([c async for c in chunks])}

    return to_response(await guarded("predict_stream", body))


def lambda_handler(event, context):
    return run_lambda(handle, event, model=True)
