"""Test doubles: fake time, in-memory stores and scripted provider transports."""

from __future__ import annotations

import json

import httpx


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeSleeper:
    """Records requested delays instead of sleeping."""

    def __init__(self, clock: FakeClock | None = None):
        self.delays: list[float] = []
        self.clock = clock

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)
        if self.clock is not None:
            self.clock.advance(seconds)

    @property
    def total(self) -> float:
        return sum(self.delays)


class MemoryStore:
    """get/set/remove store kept in memory."""

    def __init__(self, value: str = ""):
        self.value = value
        self.reads = 0

    def get(self) -> str:
        self.reads += 1
        return self.value

    def set(self, value: str) -> None:
        self.value = value

    def remove(self) -> None:
        self.value = ""


class ScriptedTransport(httpx.AsyncBaseTransport):
    """Replies with queued (status, body) pairs and records every request.

    The last reply repeats once the queue is down to one entry. A body that
    is an exception instance is raised instead of answered.
    """

    def __init__(self, *replies: tuple[int, object]):
        self.replies = list(replies) or [(200, {})]
        self.requests: list[httpx.Request] = []

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(body, Exception):
            raise body
        content = body if isinstance(body, (str, bytes)) else json.dumps(body)
        return httpx.Response(status, content=content, headers={"Content-Type": "application/json"})

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


def gemini_body(text: str = "Hello world") -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}, "finishReason": "STOP"}]}


def openai_body(text: str = "Hello world") -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": text}}], "model": "gpt-4o-mini"}
