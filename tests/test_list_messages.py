# tests/test_list_messages.py
"""
Tests for the message listing handler.
"""

import pytest

from exceptions import PersistenceError
from handlers import list_messages
from handlers.responses import ErrorKind, Failure, Success
from tests.conftest import FailingChatRepository, body_of, make_event, run

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Content-Type": "application/json",
}


class TestListMessagesSuccess:

    def test_empty_chat_returns_empty_list(self, deps):
        chat = run(deps.repository.create_chat("empty"))
        response = run(list_messages.handle(make_event(chat.chat_id), deps))

        assert response["statusCode"] == 200
        assert body_of(response) == {"messages": []}

    def test_unknown_chat_returns_empty_list(self, deps):
        """Absence of a chat is reported as no messages, not as an error."""
        response = run(list_messages.handle(make_event("missing"), deps))

        assert response["statusCode"] == 200
        assert body_of(response) == {"messages": []}

    def test_preserves_creation_order(self, deps, seeded_repository):
        response = run(list_messages.handle(make_event("abc123"), deps))

        assert response["statusCode"] == 200
        assert response["body"] == (
            '{"messages": [{"role": "user", "content": "hi"}, '
            '{"role": "assistant", "content": "hello"}]}'
        )
        assert body_of(response) == {
            "messages": [
                {"role": "user", "content": "hi"},
                {"role": "assistant", "content": "hello"},
            ]
        }

    def test_returns_exactly_n_records(self, deps):
        from models import Message

        for i in range(7):
            run(deps.repository.create_messages(
                "chat-n", [Message(role="user" if i % 2 == 0 else "assistant", content=f"m{i}")]
            ))

        messages = body_of(run(list_messages.handle(make_event("chat-n"), deps)))["messages"]
        assert len(messages) == 7
        assert [m["content"] for m in messages] == [f"m{i}" for i in range(7)]

    def test_repeated_calls_are_identical(self, deps, seeded_repository):
        first = run(list_messages.handle(make_event("abc123"), deps))
        second = run(list_messages.handle(make_event("abc123"), deps))

        assert first == second
        assert seeded_repository.calls == 2

    def test_does_not_leak_other_chats(self, deps, seeded_repository):
        from models import Message

        run(seeded_repository.create_messages("other", [Message(role="user", content="x")]))
        messages = body_of(run(list_messages.handle(make_event("abc123"), deps)))["messages"]
        assert all(m["content"] != "x" for m in messages)

    def test_success_result_type(self, deps, seeded_repository):
        result = run(list_messages.list_messages(make_event("abc123"), deps))
        assert isinstance(result, Success)
        assert len(result.payload["messages"]) == 2


class TestListMessagesFailure:

    @pytest.mark.parametrize("error", [
        PersistenceError("list_messages", TimeoutError("timed out")),
        PersistenceError("list_messages", RuntimeError("throttled")),
        KeyError("role"),
        ValueError("malformed record"),
    ])
    def test_accessor_failure_is_generic_500(self, deps, error):
        deps.repository = FailingChatRepository(error)
        response = run(list_messages.handle(make_event("abc123"), deps))

        assert response["statusCode"] == 500
        assert body_of(response) == {"message": "Internal Server Error"}

    def test_failure_kind_is_kept_internally(self, deps):
        cause = PersistenceError("list_messages", TimeoutError("timed out"))
        deps.repository = FailingChatRepository(cause)
        result = run(list_messages.list_messages(make_event("abc123"), deps))

        assert isinstance(result, Failure)
        assert result.kind is ErrorKind.PERSISTENCE
        assert result.cause is cause

    def test_unexpected_error_is_internal(self, deps):
        deps.repository = FailingChatRepository(KeyError("role"))
        result = run(list_messages.list_messages(make_event("abc123"), deps))
        assert result.kind is ErrorKind.INTERNAL

    def test_failure_is_logged(self, deps, caplog):
        deps.repository = FailingChatRepository(PersistenceError("list_messages", TimeoutError("slow")))
        with caplog.at_level("ERROR"):
            run(list_messages.handle(make_event("abc123"), deps))
        assert "list_messages failed" in caplog.text

    @pytest.mark.parametrize("event", [
        {"pathParameters": None},
        {"pathParameters": {}},
        {"pathParameters": {"chatId": ""}},
        {"pathParameters": {"chatId": "   "}},
        {},
    ])
    def test_missing_chat_id_is_bad_request(self, deps, event):
        response = run(list_messages.handle(event, deps))

        assert response["statusCode"] == 400
        assert body_of(response) == {"message": "Bad Request"}
        result = run(list_messages.list_messages(event, deps))
        assert result.kind is ErrorKind.BAD_REQUEST


class TestHeaders:

    def test_headers_on_success(self, deps, seeded_repository):
        response = run(list_messages.handle(make_event("abc123"), deps))
        assert response["headers"] == CORS_HEADERS

    def test_headers_on_failure(self, deps):
        deps.repository = FailingChatRepository(RuntimeError("down"))
        response = run(list_messages.handle(make_event("abc123"), deps))
        assert response["headers"] == CORS_HEADERS

    def test_headers_on_bad_request(self, deps):
        response = run(list_messages.handle({}, deps))
        assert response["headers"] == CORS_HEADERS
