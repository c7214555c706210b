"""FastAPI Sink — ResponseSink implementation that produces a JSONResponse.

Invariants:
    - One sink per response: emitting twice raises RuntimeError
    - response is None until emit_json has been called
"""

from fastapi.responses import JSONResponse


class JSONResponseSink:
    """Collects status + body into a fastapi JSONResponse for a handler to return."""

    def __init__(self, headers: dict[str, str] | None = None):
        self._headers = headers
        self._status: int | None = None
        self.response: JSONResponse | None = None

    def set_status(self, code: int) -> "JSONResponseSink":
        if self.response is not None:
            raise RuntimeError("Response already sent")
        self._status = code
        return self

    def emit_json(self, payload: dict) -> None:
        if self.response is not None:
            raise RuntimeError("Response already sent")
        if self._status is None:
            raise RuntimeError("Status must be set before the body")
        self.response = JSONResponse(
            status_code=self._status, content=payload, headers=self._headers,
        )
