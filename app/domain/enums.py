"""Domain enumerations for the document ledger service.

Enums represent fixed sets of domain values (registration stages,
verification outcomes).
"""

from enum import Enum


class RegistrationStage(str, Enum):
    """Stages of one upload through the registration pipeline.

    Any stage may exit to REJECTED; the last stage reached before the
    failure is reported with the error.
    """

    RECEIVED = "received"
    HASHED = "hashed"
    DEDUP_CHECKED = "dedup_checked"
    ENCRYPTED = "encrypted"
    LEDGER_WRITTEN = "ledger_written"
    COMPLETE = "complete"
    REJECTED = "rejected"

    @classmethod
    def values(cls) -> list[str]:
        """Return all stage values as strings."""
        return [stage.value for stage in cls]


class VerificationReason(str, Enum):
    """Why a verification ended the way it did."""

    VERIFIED = "verified"
    NOT_REGISTERED = "not_registered"
    REVOKED = "revoked"
