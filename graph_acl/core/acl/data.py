"""Serializable ACL description: the engine's load/save boundary.

An ``AclData`` document lists roles and resources with their parents, and
allow/deny rules keyed by resource, then role:

    {
      "roles": [["guest", null], ["user", ["guest"]]],
      "resources": [["index", null], ["blog", ["index"]]],
      "allow": [["index", [["guest", null]]], ["blog", [["user", ["write"]]]]],
      "deny": [["*", [["guest", ["delete"]]]]]
    }

``"*"`` as a resource or role stands for "all". A resource entry with a
``null`` role list applies to every role and every privilege; a role entry
with ``null`` privileges applies to every privilege.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from graph_acl.core.exceptions import AclDataError

__all__ = ["AclData", "RoleEntries", "RuleEntries", "SymbolEntries"]

logger = logging.getLogger(__name__)

# [(symbol, parents | None), ...]
SymbolEntries = list[tuple[str, list[str] | None]]
# [(role-or-*, privileges | None), ...]
RoleEntries = list[tuple[str, list[str] | None]]
# [(resource-or-*, role entries | None), ...]
RuleEntries = list[tuple[str, RoleEntries | None]]


class AclData(BaseModel):
    """Roles, resources and rules of an ACL in plain, serializable form."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "roles": [["guest", None], ["user", ["guest"]]],
                "resources": [["blog", None]],
                "allow": [["blog", [["guest", ["read"]]]]],
                "deny": None,
            }
        },
    )

    roles: SymbolEntries | None = Field(
        default=None,
        description="Roles as (name, parent names) pairs",
    )
    resources: SymbolEntries | None = Field(
        default=None,
        description="Resources as (name, parent names) pairs",
    )
    allow: RuleEntries | None = Field(
        default=None,
        description="Allow rules as (resource, [(role, privileges)]) pairs",
    )
    deny: RuleEntries | None = Field(
        default=None,
        description="Deny rules as (resource, [(role, privileges)]) pairs",
    )

    @classmethod
    def from_json(cls, data: str | bytes, source: str = "json") -> AclData:
        """Parse a JSON document.

        Args:
            data: JSON text.
            source: Label for error messages (e.g. the file path).

        Raises:
            AclDataError: If the document is not valid JSON or has the wrong shape.
        """
        try:
            return cls.model_validate_json(data)
        except ValidationError as exc:
            raise AclDataError(
                detail=f"Invalid ACL data in {source}: {exc.error_count()} validation error(s)",
                errors=exc.errors(include_url=False, include_context=False),
                source=source,
            ) from exc

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AclData:
        """Validate an already-decoded mapping.

        Raises:
            AclDataError: If the mapping has the wrong shape.
        """
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise AclDataError(
                detail=f"Invalid ACL data: {exc.error_count()} validation error(s)",
                errors=exc.errors(include_url=False, include_context=False),
            ) from exc

    @classmethod
    def from_file(cls, path: str | Path) -> AclData:
        """Read and parse a JSON file.

        Raises:
            AclDataError: If the file cannot be read or parsed.
        """
        path = Path(path)
        try:
            raw = path.read_bytes()
        except OSError as exc:
            raise AclDataError(
                detail=f"Unable to read ACL data file {path}: {exc.strerror or exc}",
                source=str(path),
            ) from exc
        data = cls.from_json(raw, source=str(path))
        logger.debug("ACL data loaded", extra={"path": str(path)})
        return data

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(indent=indent)

    def to_file(self, path: str | Path) -> None:
        Path(path).write_text(self.to_json(), encoding="utf-8")
