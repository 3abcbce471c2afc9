"""Rule values stored in the ACL rule tables."""

from __future__ import annotations

from enum import StrEnum

__all__ = ["Rule", "RuleContextScope"]


class Rule(StrEnum):
    """Outcome attached to a (resource, role, privilege) coordinate."""

    ALLOW = "allow"
    DENY = "deny"

    @property
    def is_allow(self) -> bool:
        return self is Rule.ALLOW


class RuleContextScope(StrEnum):
    """Which slot of a rule table a write landed in.

    ``FOR_ALL_SYMBOLS`` means the "for all" fallback slot was written,
    ``PER_SYMBOL`` means one entry per listed symbol.
    """

    PER_SYMBOL = "per_symbol"
    FOR_ALL_SYMBOLS = "for_all_symbols"
