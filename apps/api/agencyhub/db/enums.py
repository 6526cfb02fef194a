"""Enum definitions for application constants."""

from enum import Enum


class Role(str, Enum):
    """
    User roles, agency-level first.

    - AGENCY_OWNER: Created the agency; exactly one per agency
    - AGENCY_ADMIN: Invited agency administrator
    - SUBACCOUNT_USER: Works inside sub-accounts they have access to
    - SUBACCOUNT_GUEST: Read-only sub-account access
    """
    AGENCY_OWNER = "AGENCY_OWNER"
    AGENCY_ADMIN = "AGENCY_ADMIN"
    SUBACCOUNT_USER = "SUBACCOUNT_USER"
    SUBACCOUNT_GUEST = "SUBACCOUNT_GUEST"

    @classmethod
    def has_value(cls, value: str) -> bool:
        """Check if value is a valid role."""
        return value in cls._value2member_map_


class InvitationStatus(str, Enum):
    """Team invitation lifecycle."""
    ACCEPTED = "ACCEPTED"
    REVOKED = "REVOKED"
    PENDING = "PENDING"


DEFAULT_ROLE = Role.SUBACCOUNT_USER
AGENCY_ROLES = frozenset({Role.AGENCY_OWNER, Role.AGENCY_ADMIN})
SUBACCOUNT_ROLES = frozenset({Role.SUBACCOUNT_USER, Role.SUBACCOUNT_GUEST})
