"""Programmatic ACL checker for use in business logic.

While the ``require_privilege()`` dependency is preferred for route
protection, this class provides a way to check privileges within service
methods when a role has already been resolved and several checks are
needed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from graph_acl.core.acl.acl import Acl

__all__ = ["AclChecker"]


class AclChecker:
    """Reusable checker binding an ``Acl`` to one role.

    Example:
        >>> def publish(acl: Acl, role: str, post_id: str) -> None:
        ...     checker = AclChecker(acl, role)
        ...
        ...     # Must be able to both edit and publish blog posts
        ...     if not checker.has_all("blog_post", "edit", "publish"):
        ...         raise PermissionError("Cannot publish post")
        ...
        ...     do_publish(post_id)

    Note:
        For simple route protection, prefer the dependency:

        @router.post("/posts/{post_id}/publish")
        async def publish(_: Annotated[str, Depends(require_privilege("blog_post", "publish"))]):
            ...
    """

    def __init__(self, acl: Acl, role: str | None) -> None:
        """Initialize checker.

        Args:
            acl: The ACL to query.
            role: The already-resolved role of the caller.
        """
        self.acl = acl
        self.role = role

    def is_allowed(self, resource: str | None, privilege: str | None = None) -> bool:
        """Check whether the role may exercise ``privilege`` on ``resource``."""
        return self.acl.is_allowed(self.role, resource, privilege)

    def has_any(self, resource: str | None, *privileges: str) -> bool:
        """Check if the role has ANY of the privileges on ``resource``.

        Useful for "OR" checks where several privileges could grant access.

        Args:
            resource: Resource name.
            *privileges: Privileges to check.

        Returns:
            True if at least one privilege is allowed.
        """
        return any(self.is_allowed(resource, privilege) for privilege in privileges)

    def has_all(self, resource: str | None, *privileges: str) -> bool:
        """Check if the role has ALL of the privileges on ``resource``.

        Args:
            resource: Resource name.
            *privileges: Privileges to check.

        Returns:
            True if every privilege is allowed.
        """
        return all(self.is_allowed(resource, privilege) for privilege in privileges)

    def allowed_privileges(self, resource: str | None, *candidates: str) -> list[str]:
        """Get the candidate privileges the role holds on ``resource``.

        Useful for deciding which actions to offer in a UI.
        """
        return [p for p in candidates if self.is_allowed(resource, p)]

    def denied_privileges(self, resource: str | None, *candidates: str) -> list[str]:
        """Get the candidate privileges the role lacks on ``resource``.

        Useful for error messages explaining missing privileges.
        """
        return [p for p in candidates if not self.is_allowed(resource, p)]
