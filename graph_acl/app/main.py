"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI

from graph_acl.app.exception_handlers import register_exception_handlers
from graph_acl.app.middleware import AclMiddleware
from graph_acl.core.acl import load_acl_from_settings
from graph_acl.core.dependencies import AclDep
from graph_acl.core.settings import get_acl_settings
from graph_acl.infra.logging import setup_logging

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from graph_acl.core.acl import Acl
    from graph_acl.core.settings.acl import AclSettings

logger = logging.getLogger(__name__)


def create_app(
    acl: Acl | None = None,
    settings: AclSettings | None = None,
    *,
    enforce: bool = False,
) -> FastAPI:
    """Create and configure the ACL service application.

    Args:
        acl: ACL to serve. If omitted, it is loaded from ``AclSettings.data_file``
            when the application starts.
        settings: ACL settings. If omitted, loaded via get_acl_settings().
        enforce: Install ``AclMiddleware`` so every non-exempt request is checked.

    Returns:
        Configured FastAPI application instance.
    """
    acl_settings = settings or get_acl_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging()
        if getattr(app.state, "acl", None) is None:
            app.state.acl = load_acl_from_settings(acl_settings)
        logger.info(
            "ACL service started",
            extra={
                "roles": app.state.acl.role_count,
                "resources": app.state.acl.resource_count,
                "enforce": enforce,
            },
        )
        yield
        logger.info("ACL service stopped")

    app = FastAPI(title="graph-acl", lifespan=lifespan)
    if acl is not None:
        app.state.acl = acl

    register_exception_handlers(app)

    if enforce:
        app.add_middleware(AclMiddleware, settings=acl_settings)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/acl/decision")
    async def decision(
        acl: AclDep,
        role: str | None = None,
        resource: str | None = None,
        privilege: str | None = None,
    ) -> dict[str, Any]:
        """Explain how the ACL answers a single query."""
        result = acl.explain(role, resource, privilege)
        return {
            "role": result.role,
            "resource": result.resource,
            "privilege": result.privilege,
            "allowed": result.allowed,
            "default": result.is_default,
            "rule": str(result.rule) if result.rule is not None else None,
            "matched_role": result.matched_role,
            "matched_resource": result.matched_resource,
        }

    return app
