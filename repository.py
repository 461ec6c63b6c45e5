# repository.py
"""
Chat persistence on the document store.

Chats live in one collection keyed by chat id and carry a running
`message_count`. Messages live in a second collection partitioned by chat id;
each gets a per-chat `sequence` reserved atomically from that counter, so
listing by sequence returns conversation order even when two appends land in
the same clock tick.

Listing messages for an unknown chat id returns an empty list rather than
raising. Callers are trusted to pass ids they got from create_chat/list_chats.
"""

import logging
from typing import List, Optional, Protocol

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from config import Settings
from exceptions import PersistenceError
from models import Chat, Message, MessageRecord, utcnow

logger = logging.getLogger(__name__)


class ChatRepository(Protocol):
    async def create_chat(self, title: Optional[str] = None) -> Chat: ...

    async def list_chats(self) -> List[Chat]: ...

    async def create_messages(self, chat_id: str, messages: List[Message]) -> List[MessageRecord]: ...

    async def list_messages(self, chat_id: str) -> List[MessageRecord]: ...


class MongoChatRepository:
    def __init__(self, db: AsyncIOMotorDatabase, settings: Settings):
        self.chats = db[settings.chats_collection]
        self.messages = db[settings.messages_collection]

    async def ensure_indexes(self):
        try:
            await self.messages.create_index(
                [("chat_id", ASCENDING), ("sequence", ASCENDING)], unique=True
            )
            await self.chats.create_index([("created_at", DESCENDING)])
        except PyMongoError as e:
            raise PersistenceError("ensure_indexes", e) from e

    async def create_chat(self, title: Optional[str] = None) -> Chat:
        chat = Chat(title=title) if title else Chat()
        try:
            await self.chats.insert_one({
                "_id": chat.chat_id,
                "title": chat.title,
                "created_at": chat.created_at,
                "message_count": 0,
            })
        except PyMongoError as e:
            raise PersistenceError("create_chat", e) from e
        logger.info("Created chat %s", chat.chat_id)
        return chat

    async def list_chats(self) -> List[Chat]:
        cursor = self.chats.find().sort([("created_at", DESCENDING), ("_id", ASCENDING)])
        try:
            return [
                Chat(chat_id=doc["_id"], title=doc.get("title", "New Chat"), created_at=doc["created_at"])
                async for doc in cursor
            ]
        except PyMongoError as e:
            raise PersistenceError("list_chats", e) from e

    async def _reserve_sequence(self, chat_id: str, count: int) -> int:
        """Reserve `count` sequence numbers for a chat and return the first."""
        update = {
            "$inc": {"message_count": count},
            "$setOnInsert": {"title": "New Chat", "created_at": utcnow()},
        }
        try:
            doc = await self.chats.find_one_and_update(
                {"_id": chat_id}, update, upsert=True, return_document=ReturnDocument.AFTER
            )
        except DuplicateKeyError:
            # concurrent first append inserted the chat; the retry matches it
            logger.info("Upsert race on chat %s, retrying", chat_id)
            doc = await self.chats.find_one_and_update(
                {"_id": chat_id}, update, upsert=True, return_document=ReturnDocument.AFTER
            )
        return doc["message_count"] - count

    async def create_messages(self, chat_id: str, messages: List[Message]) -> List[MessageRecord]:
        if not messages:
            return []
        try:
            first = await self._reserve_sequence(chat_id, len(messages))
            created_at = utcnow()
            records = [
                MessageRecord(
                    chat_id=chat_id,
                    role=m.role,
                    content=m.content,
                    sequence=first + i,
                    created_at=created_at,
                )
                for i, m in enumerate(messages)
            ]
            await self.messages.insert_many([
                {
                    "_id": r.message_id,
                    "chat_id": r.chat_id,
                    "sequence": r.sequence,
                    "role": r.role,
                    "content": r.content,
                    "created_at": r.created_at,
                }
                for r in records
            ])
        except PyMongoError as e:
            raise PersistenceError("create_messages", e) from e
        logger.info("Appended %d message(s) to chat %s", len(records), chat_id)
        return records

    async def list_messages(self, chat_id: str) -> List[MessageRecord]:
        cursor = self.messages.find({"chat_id": chat_id}).sort("sequence", ASCENDING)
        try:
            return [
                MessageRecord(
                    message_id=doc["_id"],
                    chat_id=doc["chat_id"],
                    sequence=doc["sequence"],
                    role=doc["role"],
                    content=doc["content"],
                    created_at=doc["created_at"],
                )
                async for doc in cursor
            ]
        except PyMongoError as e:
            raise PersistenceError("list_messages", e) from e
