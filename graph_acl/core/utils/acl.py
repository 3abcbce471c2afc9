"""ACL checking utilities for route handlers.

Provides high-level functions that raise HTTPException with structured
RFC 7807 Problem Details responses when an ACL query denies access.

These utilities are designed for use in route handler bodies (not as
FastAPI dependencies). For dependency-based checking, use the
require_privilege() dependency factory from core.dependencies.acl.

Example Usage:
    ```python
    from graph_acl.core.dependencies.acl import AclDep, RoleDep
    from graph_acl.core.utils.acl import require_allowed

    @router.delete("/posts/{post_id}")
    async def delete_post(post_id: str, acl: AclDep, role: RoleDep, request: Request):
        post = await service.get(post_id)
        # The resource depends on data only known inside the handler
        require_allowed(acl, role, post.resource_name, "delete", request.url.path)
        await service.delete(post_id)
    ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import HTTPException, status

if TYPE_CHECKING:
    from collections.abc import Sequence

    from graph_acl.core.acl import Acl


def access_denied_detail(
    role: str | None,
    resource: str | None,
    privilege: str | None,
    request_path: str | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Build the RFC 7807 body describing a denied ACL query."""
    return {
        "type": "insufficient-permissions",
        "title": "Forbidden",
        "status": status.HTTP_403_FORBIDDEN,
        "detail": (
            f"Role '{role or '*'}' may not '{privilege or '*'}' on resource '{resource or '*'}'"
        ),
        "role": role,
        "resource": resource,
        "privilege": privilege,
        "instance": request_path,
        **extra,
    }


def require_allowed(
    acl: Acl,
    role: str | None,
    resource: str | None,
    privilege: str | None = None,
    request_path: str | None = None,
) -> None:
    """Require ``role`` to hold ``privilege`` on ``resource``.

    Args:
        acl: ACL to query.
        role: Caller's role.
        resource: Resource being accessed.
        privilege: Privilege being exercised (None = all privileges).
        request_path: Optional request path for error context (use request.url.path)

    Raises:
        HTTPException: 403 Forbidden if the ACL denies the query.
    """
    if not acl.is_allowed(role, resource, privilege):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=access_denied_detail(role, resource, privilege, request_path),
        )


def require_any_allowed(
    acl: Acl,
    role: str | None,
    resource: str | None,
    privileges: Sequence[str],
    request_path: str | None = None,
) -> None:
    """Require ``role`` to hold at least one of ``privileges`` on ``resource`` (OR logic).

    Raises:
        HTTPException: 403 Forbidden if every privilege is denied, or none are given.
    """
    roles = [role] if role else None
    resources = [resource] if resource else None
    if not privileges or not acl.is_allowed_any(roles, resources, privileges):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=access_denied_detail(
                role,
                resource,
                None,
                request_path,
                detail=(
                    f"Role '{role or '*'}' holds none of {list(privileges)} "
                    f"on resource '{resource or '*'}'"
                ),
                required_privileges=list(privileges),
            ),
        )
