"""Tests for patmux.server.sender response emission rules."""

from typing import Any

import pytest

from patmux.http.response import Response
from patmux.server.sender import send_response


async def _emit(response: Response, *, head: bool = False) -> list[dict[str, Any]]:
    messages: list[dict[str, Any]] = []

    async def send(message: dict[str, Any]) -> None:
        messages.append(message)

    await send_response(response, send, head=head)
    return messages


class TestSendResponse:
    @pytest.mark.anyio
    async def test_200_preserves_body(self) -> None:
        messages = await _emit(Response("ok"))
        assert messages[0]["type"] == "http.response.start"
        assert messages[0]["status"] == 200
        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"2"
        assert headers[b"content-type"] == b"text/html; charset=utf-8"
        assert messages[1] == {"type": "http.response.body", "body": b"ok"}

    @pytest.mark.anyio
    async def test_header_names_lowered(self) -> None:
        messages = await _emit(Response("").with_header("Location", "/x"))
        assert (b"location", b"/x") in messages[0]["headers"]

    @pytest.mark.anyio
    async def test_204_drops_body_and_sets_zero_content_length(self) -> None:
        messages = await _emit(Response("unexpected-body").with_status(204))
        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"0"
        assert messages[1]["body"] == b""

    @pytest.mark.anyio
    async def test_304_drops_body(self) -> None:
        messages = await _emit(Response("unexpected-body").with_status(304))
        assert messages[1]["body"] == b""

    @pytest.mark.anyio
    async def test_head_keeps_length_drops_body(self) -> None:
        messages = await _emit(Response("hello"), head=True)
        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"5"
        assert messages[1]["body"] == b""
