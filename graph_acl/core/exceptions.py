"""Exception hierarchy for the ACL engine.

Every error carries RFC 7807 fields so the HTTP layer can render it as-is.
"""

from __future__ import annotations

from typing import Any

_TITLES = {
    400: "Bad Request",
    403: "Forbidden",
    404: "Not Found",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
    503: "Service Unavailable",
}


class AclException(Exception):
    """Base class for ACL engine errors.

    ``status_code``, ``type``, ``title`` and ``instance`` map onto the
    problem-details body; ``extra`` is merged into it.

    Example:
        raise AclException(422, "Role graph contains a cycle", type="cyclic-graph")
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        type: str = "about:blank",
        title: str | None = None,
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        self.status_code = status_code
        self.detail = detail
        self.type = type
        self.title = title or self._default_title(status_code)
        self.instance = instance
        self.extra = extra or {}
        super().__init__(detail)

    @staticmethod
    def _default_title(status_code: int) -> str:
        return _TITLES.get(status_code, "Error")


# ============================================================================
# Structural errors
# ============================================================================


class InvalidVertexError(AclException):
    """Raised when a vertex index is outside a digraph's range.

    Example:
        raise InvalidVertexError(vertex=7, max_vertex=3)
    """

    def __init__(
        self,
        vertex: int,
        max_vertex: int,
        instance: str | None = None,
    ) -> None:
        """Initialize invalid vertex exception.

        Args:
            vertex: The offending vertex index.
            max_vertex: The largest valid vertex index (``-1`` for an empty graph).
            instance: URI reference identifying this specific occurrence.
        """
        self.vertex = vertex
        self.max_vertex = max_vertex
        super().__init__(
            status_code=500,
            detail=f"Vertex {vertex} is out of index range 0-{max_vertex}",
            type="invalid-vertex",
            title="Invalid Vertex",
            instance=instance,
            extra={"vertex": vertex, "max_vertex": max_vertex},
        )


class UnknownSymbolError(AclException):
    """Raised when a symbol is not registered in a symbol graph."""

    def __init__(
        self,
        symbol: str,
        graph: str | None = None,
        instance: str | None = None,
    ) -> None:
        self.symbol = symbol
        self.graph = graph
        extra: dict[str, Any] = {"symbol": symbol}
        if graph:
            extra["graph"] = graph
        super().__init__(
            status_code=404,
            detail=f"Invalid vertex symbol '{symbol}' not found in graph.",
            type="unknown-symbol",
            title="Unknown Symbol",
            instance=instance,
            extra=extra,
        )


class GraphFormatError(AclException):
    """Raised when a textual graph description cannot be parsed.

    Example:
        raise GraphFormatError("Expected two vertices per edge line", line_number=4)
    """

    def __init__(
        self,
        detail: str,
        line_number: int | None = None,
        instance: str | None = None,
    ) -> None:
        self.line_number = line_number
        super().__init__(
            status_code=422,
            detail=detail if line_number is None else f"Line {line_number}: {detail}",
            type="graph-format-error",
            title="Graph Format Error",
            instance=instance,
            extra={"line_number": line_number} if line_number is not None else None,
        )


class AclDataError(AclException):
    """Raised when an ACL data record is malformed or cannot be read.

    Example:
        raise AclDataError(
            detail="Invalid ACL data",
            errors=[{"loc": ["roles", 0], "msg": "Input should be a valid list"}],
        )
    """

    def __init__(
        self,
        detail: str,
        errors: list[dict[str, Any]] | None = None,
        source: str | None = None,
        instance: str | None = None,
    ) -> None:
        """Initialize ACL data exception.

        Args:
            detail: Human-readable error message.
            errors: Structured validation errors, if any.
            source: Where the data was read from (file path, "json", ...).
            instance: URI reference identifying this specific occurrence.
        """
        self.errors = errors or []
        self.source = source
        extra: dict[str, Any] = {}
        if errors:
            extra["errors"] = errors
        if source:
            extra["source"] = source
        super().__init__(
            status_code=422,
            detail=detail,
            type="invalid-acl-data",
            title="Invalid ACL Data",
            instance=instance,
            extra=extra or None,
        )


# ============================================================================
# Cyclicity errors
# ============================================================================


class CyclicGraphError(AclException):
    """Raised when a role or resource hierarchy contains a cycle.

    The message lists the cycle in inheritance order, e.g.
    ``Acl contains cyclic edges in "roles" graph: "a <- b <- a"``.
    """

    def __init__(
        self,
        graph: str,
        cycle: list[str],
        instance: str | None = None,
    ) -> None:
        """Initialize cyclic graph exception.

        Args:
            graph: Name of the offending graph ("roles" or "resources").
            cycle: Symbols along the cycle, first and last being the same.
            instance: URI reference identifying this specific occurrence.
        """
        self.graph = graph
        self.cycle = cycle
        super().__init__(
            status_code=422,
            detail=f'Acl contains cyclic edges in "{graph}" graph: "{" <- ".join(cycle)}"',
            type="cyclic-graph",
            title="Cyclic Graph",
            instance=instance,
            extra={"graph": graph, "cycle": cycle},
        )


# ============================================================================
# HTTP integration errors
# ============================================================================


class AccessDeniedError(AclException):
    """Raised when an ACL query denies the requested action.

    Example:
        raise AccessDeniedError(role="guest", resource="blog", privilege="delete")
    """

    def __init__(
        self,
        role: str | None = None,
        resource: str | None = None,
        privilege: str | None = None,
        detail: str | None = None,
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize access denied exception."""
        if detail is None:
            detail = (
                f"Role '{role or '*'}' may not '{privilege or '*'}' "
                f"on resource '{resource or '*'}'"
            )
        final_extra: dict[str, Any] = {
            "role": role,
            "resource": resource,
            "privilege": privilege,
        }
        if extra:
            final_extra.update(extra)
        self.role = role
        self.resource = resource
        self.privilege = privilege
        super().__init__(
            status_code=403,
            detail=detail,
            type="insufficient-permissions",
            title="Forbidden",
            instance=instance,
            extra=final_extra,
        )


class AclNotConfiguredError(AclException):
    """Raised when a request needs an ACL but none is installed on the app."""

    def __init__(
        self,
        detail: str = "No ACL has been configured for this application",
        instance: str | None = None,
    ) -> None:
        """Initialize ACL-not-configured exception."""
        super().__init__(
            status_code=503,
            detail=detail,
            type="acl-not-configured",
            title="Service Unavailable",
            instance=instance,
        )


__all__ = [
    "AccessDeniedError",
    "AclDataError",
    "AclException",
    "AclNotConfiguredError",
    "CyclicGraphError",
    "GraphFormatError",
    "InvalidVertexError",
    "UnknownSymbolError",
]
