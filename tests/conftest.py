# tests/conftest.py
"""
Pytest configuration and shared fixtures.
"""

import asyncio
import json
import sys
from pathlib import Path
from typing import List, Optional

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from langchain_core.language_models import BaseChatModel
from langchain_core.language_models.fake_chat_models import GenericFakeChatModel
from langchain_core.messages import AIMessage

from config import Settings
from handlers.runtime import Deps
from models import Chat, Message, MessageRecord
from simplechat import ChatBot


# =============================================================================
# Fakes
# =============================================================================

class InMemoryChatRepository:
    """Dict-backed repository with the same ordering contract as the Mongo one."""

    def __init__(self):
        self.chats: List[Chat] = []
        self.messages: dict = {}
        self.calls = 0

    async def create_chat(self, title: Optional[str] = None) -> Chat:
        chat = Chat(title=title) if title else Chat()
        self.chats.append(chat)
        return chat

    async def list_chats(self) -> List[Chat]:
        return list(reversed(self.chats))

    async def create_messages(self, chat_id: str, messages: List[Message]) -> List[MessageRecord]:
        stored = self.messages.setdefault(chat_id, [])
        records = [
            MessageRecord(chat_id=chat_id, role=m.role, content=m.content, sequence=len(stored) + i)
            for i, m in enumerate(messages)
        ]
        stored.extend(records)
        return records

    async def list_messages(self, chat_id: str) -> List[MessageRecord]:
        self.calls += 1
        return list(self.messages.get(chat_id, []))


class FailingChatRepository:
    def __init__(self, error: Exception):
        self.error = error

    async def create_chat(self, title=None):
        raise self.error

    async def list_chats(self):
        raise self.error

    async def create_messages(self, chat_id, messages):
        raise self.error

    async def list_messages(self, chat_id):
        raise self.error


class ExplodingChatModel(BaseChatModel):
    @property
    def _llm_type(self) -> str:
        return "exploding"

    def _generate(self, messages, stop=None, run_manager=None, **kwargs):
        raise RuntimeError("rate limited")


# =============================================================================
# Helpers
# =============================================================================

def run(coro):
    return asyncio.run(coro)


def body_of(response: dict) -> dict:
    return json.loads(response["body"])


def make_event(chat_id: Optional[str] = None, body=None) -> dict:
    return {
        "pathParameters": {"chatId": chat_id} if chat_id is not None else None,
        "body": json.dumps(body) if body is not None else None,
    }


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def settings():
    return Settings.from_env({
        "MONGODB_URI": "mongodb://localhost:27017",
        "DATABASE_NAME": "chat_api_test",
    })


@pytest.fixture
def repository():
    return InMemoryChatRepository()


@pytest.fixture
def fake_llm():
    return GenericFakeChatModel(messages=iter([AIMessage(content="hello there friend")]))


@pytest.fixture
def deps(settings, repository, fake_llm):
    return Deps(settings=settings, repository=repository, chatbot=ChatBot(fake_llm))


@pytest.fixture
def seeded_repository(repository):
    run(repository.create_messages("abc123", [
        Message(role="user", content="hi"),
        Message(role="assistant", content="hello"),
    ]))
    return repository


@pytest.fixture
def test_client(deps):
    """Create FastAPI test client over in-memory dependencies."""
    from fastapi.testclient import TestClient
    from server import create_app

    return TestClient(create_app(deps))
