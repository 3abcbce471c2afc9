"""Middleware for the ACL service."""

from __future__ import annotations

from .acl import AclMiddleware, get_acl_decision_from_request

__all__ = ["AclMiddleware", "get_acl_decision_from_request"]
