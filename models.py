from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Optional
from datetime import datetime, timezone
from uuid import uuid4


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


Role = Literal["user", "assistant", "system"]


class Message(BaseModel):
    role: Role
    content: str


class MessageRecord(Message):
    """A stored message; `sequence` is its position in the chat's conversation order."""
    model_config = ConfigDict(populate_by_name=True)

    message_id: str = Field(default_factory=lambda: uuid4().hex, alias="messageId")
    chat_id: str = Field(alias="chatId")
    sequence: int
    created_at: datetime = Field(default_factory=utcnow, alias="createdAt")

    def public(self) -> Message:
        return Message(role=self.role, content=self.content)


class Chat(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    chat_id: str = Field(default_factory=lambda: uuid4().hex, alias="chatId")
    title: str = "New Chat"
    created_at: datetime = Field(default_factory=utcnow, alias="createdAt")


# ------------------ Request bodies ------------------
class CreateChatRequest(BaseModel):
    title: Optional[str] = None


class MessagesRequest(BaseModel):
    messages: List[Message] = Field(min_length=1)
