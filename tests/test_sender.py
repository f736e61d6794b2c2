"""Tests for roost.server.sender response emission rules."""

from roost.http.response import Response
from roost.server.sender import send_response


async def _capture(response: Response) -> list[dict]:
    messages: list[dict] = []

    async def send(message: dict) -> None:
        messages.append(message)

    await send_response(response, send)
    return messages


class TestSendResponse:
    async def test_304_drops_body_and_sets_zero_content_length(self) -> None:
        messages = await _capture(Response("unexpected-body", status=304))
        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"0"
        assert messages[1]["body"] == b""

    async def test_200_preserves_body(self) -> None:
        messages = await _capture(Response("ok"))
        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"2"
        assert messages[1]["body"] == b"ok"

    async def test_head_keeps_declared_length(self) -> None:
        response = Response(b"12345").with_header("Content-Length", "5").without_body()
        messages = await _capture(response)
        lengths = [v for k, v in messages[0]["headers"] if k == b"content-length"]
        assert lengths == [b"5"]
        assert messages[1]["body"] == b""

    async def test_header_names_lowercased(self) -> None:
        messages = await _capture(Response("x").with_header("Cache-Control", "max-age=1"))
        assert (b"cache-control", b"max-age=1") in messages[0]["headers"]
