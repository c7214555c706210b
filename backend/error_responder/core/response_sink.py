"""Response Sink Protocols — the contract ErrorResponder.send writes through.

Invariants:
    - send() calls set_status exactly once, then emit_json exactly once
    - Sinks own transmission; their failures propagate to the caller

Design Decisions:
    - Protocol over ABC: structural subtyping, framework adapters need no base class
    - Two-step contract mirrors `response.status(code).json(body)` chaining
"""

from typing import Protocol


class BodyEmitter(Protocol):
    """Second step of a sink: emits the serialized body."""
    def emit_json(self, payload: dict) -> None: ...


class ResponseSink(Protocol):
    """First step of a sink: accepts the status code."""
    def set_status(self, code: int) -> BodyEmitter: ...


class RecordingSink:
    """In-memory sink that keeps what was sent. No transmission."""

    def __init__(self):
        self.status: int | None = None
        self.body: dict | None = None
        self.sent_count = 0

    def set_status(self, code: int) -> "RecordingSink":
        self.status = code
        return self

    def emit_json(self, payload: dict) -> None:
        self.body = payload
        self.sent_count += 1
