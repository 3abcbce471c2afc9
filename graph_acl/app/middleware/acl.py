"""ACL enforcement middleware.

Maps every HTTP request onto an ACL query using three headers:

    X-User-Role   the caller's already-resolved role
    X-Resource    the resource being accessed
    X-Privilege   the privilege being exercised

Missing headers fall back to the defaults in ``AclSettings``. Denied
requests get a 403 ``application/problem+json`` response; allowed requests
continue with the decision stored on ``request.state.acl_decision``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from starlette.datastructures import Headers
from starlette.responses import JSONResponse

from graph_acl.core.exceptions import AccessDeniedError, AclException, AclNotConfiguredError
from graph_acl.core.schemas.problem_details import ProblemDetails

if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.types import ASGIApp, Receive, Scope, Send

    from graph_acl.core.acl import AccessDecision, Acl
    from graph_acl.core.settings.acl import AclSettings

logger = logging.getLogger(__name__)

__all__ = ["AclMiddleware", "get_acl_decision_from_request"]


class AclMiddleware:
    """Pure ASGI middleware enforcing an ``Acl`` on every HTTP request.

    Usage:
        app = FastAPI()
        app.state.acl = load_acl_from_settings()
        app.add_middleware(AclMiddleware)

        # Or pin an ACL explicitly
        app.add_middleware(AclMiddleware, acl=my_acl)
    """

    state_key = "acl_decision"

    def __init__(
        self,
        app: ASGIApp,
        acl: Acl | None = None,
        settings: AclSettings | None = None,
    ) -> None:
        """Initialize ACL middleware.

        Args:
            app: The ASGI application.
            acl: ACL to enforce. If omitted, ``app.state.acl`` is read per request.
            settings: Header names, defaults and exempt paths. If omitted,
                settings are loaded via get_acl_settings().
        """
        if settings is None:
            from graph_acl.core.settings import get_acl_settings

            settings = get_acl_settings()
        self.app = app
        self.acl = acl
        self.settings = settings

    def _resolve_acl(self, scope: Scope) -> Acl | None:
        if self.acl is not None:
            return self.acl
        app_obj = scope.get("app")
        state = getattr(app_obj, "state", None)
        return getattr(state, "acl", None)

    def _is_exempt(self, path: str) -> bool:
        # Whole path segments only: "/health" exempts "/health/live", not "/healthcare".
        return any(
            path == prefix or path.startswith(prefix.rstrip("/") + "/")
            for prefix in self.settings.exempt_paths
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Process ASGI request with ACL enforcement.

        Args:
            scope: ASGI connection scope.
            receive: ASGI receive channel.
            send: ASGI send channel.
        """
        if scope["type"] != "http" or self._is_exempt(scope.get("path", "")):
            await self.app(scope, receive, send)
            return

        path = scope.get("path", "")
        acl = self._resolve_acl(scope)
        if acl is None:
            logger.error("ACL middleware active but no ACL configured", extra={"path": path})
            await self._problem_response(AclNotConfiguredError(instance=path), scope, receive, send)
            return

        headers = Headers(scope=scope)
        role = headers.get(self.settings.role_header) or self.settings.default_role
        resource = headers.get(self.settings.resource_header) or self.settings.default_resource
        privilege = headers.get(self.settings.privilege_header) or self.settings.default_privilege

        decision = acl.explain(role, resource, privilege)
        scope.setdefault("state", {})[self.state_key] = decision

        if not decision.allowed:
            logger.warning(
                "Access denied",
                extra={
                    "role": role,
                    "resource": resource,
                    "privilege": privilege,
                    "path": path,
                    "default_deny": decision.is_default,
                },
            )
            error = AccessDeniedError(role=role, resource=resource, privilege=privilege, instance=path)
            await self._problem_response(error, scope, receive, send)
            return

        if self.settings.log_decisions:
            logger.debug(
                "Access allowed",
                extra={
                    "role": role,
                    "resource": resource,
                    "privilege": privilege,
                    "matched_role": decision.matched_role,
                    "matched_resource": decision.matched_resource,
                },
            )
        await self.app(scope, receive, send)

    @staticmethod
    async def _problem_response(exc: AclException, scope: Scope, receive: Receive, send: Send) -> None:
        problem = ProblemDetails(
            type=exc.type,
            title=exc.title,
            status=exc.status_code,
            detail=exc.detail,
            instance=exc.instance,
        )
        response = JSONResponse(
            status_code=exc.status_code,
            content=problem.to_response_body(extra=exc.extra),
            media_type="application/problem+json",
        )
        await response(scope, receive, send)


def get_acl_decision_from_request(request: Request) -> AccessDecision | None:
    """Return the decision the middleware stored for this request, if any."""
    return getattr(request.state, AclMiddleware.state_key, None)
