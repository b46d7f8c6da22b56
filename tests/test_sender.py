"""Tests for warren.server.sender response emission rules."""

from typing import Any

from warren.http.response import Response
from warren.server.sender import send_response


async def _send(response: Response, **kwargs: Any) -> list[dict[str, Any]]:
    messages: list[dict[str, Any]] = []

    async def send(message: dict[str, Any]) -> None:
        messages.append(message)

    await send_response(response, send, **kwargs)
    return messages


class TestSendResponse:
    async def test_start_and_body(self) -> None:
        messages = await _send(Response("ok"))
        assert messages[0]["type"] == "http.response.start"
        assert messages[0]["status"] == 200
        headers = dict(messages[0]["headers"])
        assert headers[b"content-type"] == b"text/html; charset=utf-8"
        assert headers[b"content-length"] == b"2"
        assert messages[1] == {"type": "http.response.body", "body": b"ok"}

    async def test_header_names_lowercased(self) -> None:
        messages = await _send(Response("ok").with_header("X-Thing", "1"))
        assert (b"x-thing", b"1") in messages[0]["headers"]

    async def test_user_content_length_replaced(self) -> None:
        messages = await _send(Response("ok").with_header("Content-Length", "999"))
        lengths = [v for k, v in messages[0]["headers"] if k == b"content-length"]
        assert lengths == [b"2"]

    async def test_content_length_counts_bytes(self) -> None:
        messages = await _send(Response("é"))
        assert dict(messages[0]["headers"])[b"content-length"] == b"2"


class TestNoBodyStatuses:
    async def test_204_drops_body(self) -> None:
        messages = await _send(Response("unexpected").with_status(204))
        assert dict(messages[0]["headers"])[b"content-length"] == b"0"
        assert messages[1]["body"] == b""

    async def test_304_drops_body(self) -> None:
        messages = await _send(Response("unexpected").with_status(304))
        assert messages[1]["body"] == b""


class TestHead:
    async def test_body_omitted_length_kept(self) -> None:
        messages = await _send(Response("hello"), include_body=False)
        assert dict(messages[0]["headers"])[b"content-length"] == b"5"
        assert messages[1]["body"] == b""
