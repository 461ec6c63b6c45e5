# simplechat.py
import logging
from typing import AsyncIterator, List

from langgraph.graph import StateGraph, START, END
from langgraph.graph.message import add_messages
from langchain_groq import ChatGroq
from typing import TypedDict, Annotated
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, AIMessageChunk, HumanMessage, SystemMessage, BaseMessage

from config import Settings, resolve_secret
from exceptions import UpstreamError
from models import Message

logger = logging.getLogger(__name__)


class ChatState(TypedDict):
    messages: Annotated[list[BaseMessage], add_messages]


def to_langchain(messages: List[Message]) -> List[BaseMessage]:
    history = []
    for m in messages:
        if m.role == "user":
            history.append(HumanMessage(content=m.content))
        elif m.role == "assistant":
            history.append(AIMessage(content=m.content))
        else:
            history.append(SystemMessage(content=m.content))
    return history


def create_llm(settings: Settings) -> ChatGroq:
    return ChatGroq(model=settings.llm_model, api_key=resolve_secret(settings.llm_api_key_secret))


class ChatBot:
    """Single-node conversation graph over a chat model."""

    def __init__(self, llm: BaseChatModel):
        self.llm = llm

        async def chat_node(state: ChatState):
            response = await self.llm.ainvoke(state["messages"])
            return {"messages": [response]}

        graph = StateGraph(ChatState)
        graph.add_node("chat_node", chat_node)
        graph.add_edge(START, "chat_node")
        graph.add_edge("chat_node", END)
        self.graph = graph.compile()

    async def complete(self, messages: List[Message]) -> str:
        try:
            result = await self.graph.ainvoke({"messages": to_langchain(messages)})
        except Exception as e:
            raise UpstreamError(e) from e
        return result["messages"][-1].content

    async def stream(self, messages: List[Message]) -> AsyncIterator[str]:
        """Yield completion text chunks as the model produces them."""
        streamed = False
        reply = None
        try:
            async for chunk, metadata in self.graph.astream(
                {"messages": to_langchain(messages)}, stream_mode="messages"
            ):
                if isinstance(chunk, AIMessageChunk):
                    if chunk.content:
                        streamed = True
                        yield chunk.content
                elif isinstance(chunk, AIMessage):
                    reply = chunk
        except Exception as e:
            raise UpstreamError(e) from e

        # model did not stream tokens; emit the whole reply once
        if not streamed and reply is not None and reply.content:
            logger.debug("Model returned an unstreamed reply")
            yield reply.content
