import json
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.responses import StreamingResponse
from fastapi.middleware.cors import CORSMiddleware

from db import create_client, get_database
from handlers import create_chat, create_messages, list_chats, list_messages, predict, predict_stream
from handlers.responses import Failure, to_response
from handlers.runtime import Deps, get_settings
from repository import MongoChatRepository
from simplechat import ChatBot, create_llm

logger = logging.getLogger(__name__)


# ------------------ Event adaptation ------------------
async def to_event(request: Request) -> dict:
    raw = await request.body()
    return {
        "httpMethod": request.method,
        "path": request.url.path,
        "pathParameters": dict(request.path_params) or None,
        "queryStringParameters": dict(request.query_params) or None,
        "body": raw.decode("utf-8", errors="replace") if raw else None,
        "isBase64Encoded": False,
    }


def to_http(response: dict) -> Response:
    return Response(
        content=response["body"],
        status_code=response["statusCode"],
        headers=response["headers"],
    )


def sse(event: str, data) -> str:
    return f"event: {event}\ndata: {json.dumps(data)}\n\n"


# ------------------ App ------------------
def create_app(deps: Optional[Deps] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if deps is not None:
            yield
            return

        settings = get_settings()
        client = create_client(settings)
        try:
            repository = MongoChatRepository(get_database(client, settings), settings)
            await repository.ensure_indexes()
            app.state.deps = Deps(
                settings=settings,
                repository=repository,
                chatbot=ChatBot(create_llm(settings)),
            )
            logger.info("Connected to database %s", settings.database_name)
            yield
        finally:
            client.close()

    app = FastAPI(title="Chat API", lifespan=lifespan)
    if deps is not None:
        app.state.deps = deps

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ------------------ Chats ------------------
    @app.get("/chats")
    async def get_chats(request: Request):
        return to_http(await list_chats.handle(await to_event(request), request.app.state.deps))

    @app.post("/chats")
    async def post_chat(request: Request):
        return to_http(await create_chat.handle(await to_event(request), request.app.state.deps))

    # ------------------ Messages ------------------
    @app.get("/chats/{chatId}/messages")
    async def get_messages(chatId: str, request: Request):
        return to_http(await list_messages.handle(await to_event(request), request.app.state.deps))

    @app.post("/chats/{chatId}/messages")
    async def post_messages(chatId: str, request: Request):
        return to_http(await create_messages.handle(await to_event(request), request.app.state.deps))

    # ------------------ Predict ------------------
    @app.post("/predict")
    async def post_predict(request: Request):
        return to_http(await predict.handle(await to_event(request), request.app.state.deps))

    @app.post("/predict/stream")
    async def post_predict_stream(request: Request):
        chunks = await predict_stream.open_stream(await to_event(request), request.app.state.deps)
        if isinstance(chunks, Failure):
            return to_http(to_response(chunks))

        async def event_generator():
            try:
                async for chunk in chunks:
                    yield sse("message", {"content": chunk})
                yield sse("end", "done")
            except Exception:
                logger.exception("predict_stream failed mid-stream")
                yield sse("error", {"message": "Internal Server Error"})

        return StreamingResponse(
            event_generator(),
            media_type="text/event-stream",
            headers={"Access-Control-Allow-Origin": "*"},
        )

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
