from handlers import create_chat, create_messages, list_chats, list_messages, predict, predict_stream
from handlers.responses import ErrorKind, Failure, HandlerResult, Success, to_response
from handlers.runtime import Deps

__all__ = [
    "create_chat",
    "create_messages",
    "list_chats",
    "list_messages",
    "predict",
    "predict_stream",
    "Deps",
    "ErrorKind",
    "Failure",
    "HandlerResult",
    "Success",
    "to_response",
]
