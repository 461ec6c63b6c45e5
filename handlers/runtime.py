# handlers/runtime.py
"""
Dependencies handed to handlers, and the function-as-a-service entry glue.

Settings are read once per process (cached across warm invocations). Each
invocation runs on its own event loop, so the store client is opened and
closed inside it.
"""

import asyncio
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional

from config import Settings
from db import create_client, get_database
from logger import setup_logger
from repository import ChatRepository, MongoChatRepository
from simplechat import ChatBot, create_llm


@dataclass
class Deps:
    settings: Settings
    repository: Optional[ChatRepository] = None
    chatbot: Optional[ChatBot] = None


Handle = Callable[[Mapping[str, Any], Deps], Awaitable[Dict[str, Any]]]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    settings = Settings.from_env()
    setup_logger(settings.log_level)
    return settings


def run_lambda(handle: Handle, event: Mapping[str, Any], store: bool = False, model: bool = False) -> Dict[str, Any]:
    settings = get_settings()

    async def main():
        deps = Deps(settings=settings)
        if model:
            deps.chatbot = ChatBot(create_llm(settings))
        if not store:
            return await handle(event, deps)
        client = create_client(settings)
        try:
            deps.repository = MongoChatRepository(get_database(client, settings), settings)
            return await handle(event, deps)
        finally:
            client.close()

    return asyncio.run(main())
