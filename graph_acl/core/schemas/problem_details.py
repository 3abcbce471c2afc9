"""Problem details (RFC 7807) response body."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ProblemDetails(BaseModel):
    """Error body returned for denied or failed ACL requests.

    ``type`` is a short slug such as ``insufficient-permissions`` rather than
    a full URI; problem-specific members (role, resource, cycle, ...) travel
    in the ``extra`` mapping given to ``to_response_body``.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    type: str = Field(default="about:blank", min_length=1, max_length=200)
    title: str = Field(min_length=1, max_length=200)
    status: int = Field(ge=100, le=599)
    detail: str | None = None
    instance: str | None = None

    def to_response_body(self, extra: dict[str, Any] | None = None) -> dict[str, Any]:
        """JSON-ready body; ``extra`` never overrides the standard members."""
        body = self.model_dump(exclude_none=True)
        for key, value in (extra or {}).items():
            body.setdefault(key, value)
        return body
