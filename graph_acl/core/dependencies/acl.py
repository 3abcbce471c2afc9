"""FastAPI dependencies for ACL-protected routes.

The application holds one ``Acl`` on ``app.state.acl``. Publishing a new
ACL is a single attribute assignment; in-flight requests keep the instance
they already resolved.

Example:
    @router.get("/blog/{post_id}")
    async def read_post(
        role: Annotated[str | None, Depends(require_privilege("blog", "read"))],
    ):
        ...

    # With path parameter substitution:
    @router.get("/{section}/posts")
    async def list_posts(
        role: Annotated[str | None, Depends(require_privilege("{section}", "list"))],
    ):
        ...
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Coroutine
from typing import Annotated, Any

from fastapi import Depends, HTTPException, Request, status

from graph_acl.core.acl import Acl
from graph_acl.core.exceptions import AclNotConfiguredError
from graph_acl.core.settings import AclSettings, get_acl_settings
from graph_acl.core.utils.acl import access_denied_detail

logger = logging.getLogger(__name__)

__all__ = [
    "AclDep",
    "RoleDep",
    "get_acl",
    "get_role",
    "require_privilege",
]


def get_acl(request: Request) -> Acl:
    """Return the ACL installed on the application.

    Raises:
        AclNotConfiguredError: If ``app.state.acl`` is not set.
    """
    acl = getattr(request.app.state, "acl", None)
    if acl is None:
        raise AclNotConfiguredError(instance=request.url.path)
    return acl


def get_role(
    request: Request,
    settings: Annotated[AclSettings, Depends(get_acl_settings)],
) -> str | None:
    """Return the caller's role from the role header, or the configured default."""
    return request.headers.get(settings.role_header) or settings.default_role


AclDep = Annotated[Acl, Depends(get_acl)]
RoleDep = Annotated[str | None, Depends(get_role)]


def require_privilege(
    resource: str | None,
    privilege: str | None = None,
) -> Callable[[Request, Acl, str | None], Coroutine[Any, Any, str | None]]:
    """Dependency factory requiring the caller's role to hold ``privilege`` on ``resource``.

    The resource can include path parameter placeholders like ``{section}``
    that are formatted with actual request values.

    Args:
        resource: Resource name (may include placeholders); None for the wildcard slot.
        privilege: Privilege name; None requires "all privileges".

    Returns:
        Dependency function resolving to the caller's role.
    """

    async def privilege_checker(request: Request, acl: AclDep, role: RoleDep) -> str | None:
        formatted_resource = resource.format(**request.path_params) if resource else resource

        if not acl.is_allowed(role, formatted_resource, privilege):
            logger.warning(
                "Role lacks required privilege",
                extra={
                    "role": role,
                    "resource": formatted_resource,
                    "original_resource": resource,
                    "privilege": privilege,
                    "path": request.url.path,
                },
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=access_denied_detail(role, formatted_resource, privilege, request.url.path),
            )

        return role

    return privilege_checker
