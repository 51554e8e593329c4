"""
Enumerations shared by models and services.

Values are stored as plain strings in the database.
"""

from enum import StrEnum


class TokenStandard(StrEnum):
    """Token kind of a watched transfer contract."""

    ERC20 = "ERC20"  # fungible, value is an amount
    ERC721 = "ERC721"  # non-fungible, value is a token id


class KycListKind(StrEnum):
    """Registry list a status-change log belongs to."""

    WHITELIST = "whitelist"
    BLACKLIST = "blacklist"


class KycAction(StrEnum):
    """Action recorded for a KYC status change."""

    WHITELIST_ADDED = "whitelist_added"
    WHITELIST_REMOVED = "whitelist_removed"
    BLACKLIST_ADDED = "blacklist_added"
    BLACKLIST_REMOVED = "blacklist_removed"

    @classmethod
    def from_status(cls, kind: KycListKind, status: bool) -> "KycAction":
        """Combine list kind and on-chain flag into an action label."""
        suffix = "added" if status else "removed"
        return cls(f"{kind.value}_{suffix}")


class KycStatus(StrEnum):
    """Derived KYC status of a user."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @classmethod
    def from_flags(cls, whitelisted: bool, blacklisted: bool) -> "KycStatus":
        """Blacklist wins over whitelist; neither means pending."""
        if blacklisted:
            return cls.REJECTED
        if whitelisted:
            return cls.APPROVED
        return cls.PENDING
