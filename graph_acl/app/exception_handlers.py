"""Global exception handlers for FastAPI application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from graph_acl.core.exceptions import AclException
from graph_acl.core.schemas.problem_details import ProblemDetails

logger = logging.getLogger(__name__)


async def acl_exception_handler(request: Request, exc: AclException) -> JSONResponse:
    """Convert ``AclException`` instances into RFC 7807 Problem Details responses.

    Args:
        request: The FastAPI request object.
        exc: The exception that was raised.

    Returns:
        JSONResponse with RFC 7807 Problem Details format.
    """
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "ACL exception occurred",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": exc.type,
            "status_code": exc.status_code,
            "detail": exc.detail,
        },
    )

    problem = ProblemDetails(
        type=exc.type,
        title=exc.title,
        status=exc.status_code,
        detail=exc.detail,
        instance=exc.instance or request.url.path,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=problem.to_response_body(extra=exc.extra),
        media_type="application/problem+json",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register the ACL exception handlers on ``app``."""
    app.add_exception_handler(AclException, acl_exception_handler)  # type: ignore[arg-type]
