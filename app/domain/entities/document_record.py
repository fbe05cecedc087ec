"""Document record domain entity.

Mirror of a ledger-owned record. The ledger is the source of truth; the
service only holds a record for the duration of a request.
"""

from dataclasses import dataclass
from datetime import datetime

from app.shared.utils.datetime import try_from_timestamp_utc


@dataclass(frozen=True)
class DocumentRecord:
    """One registered document as stored on the ledger.

    issue_date is supplied by the issuer; upload_date and uploader are set
    by the ledger at write time. Both dates are seconds since epoch.
    is_valid only changes through the issuer's revocation path, which is
    outside this service.
    """

    document_id: str
    document_hash: str
    owner_id: str
    owner_name: str
    document_type: str
    issuer_organization: str
    issue_date: int
    upload_date: int
    uploader: str
    is_valid: bool = True

    @property
    def issued_at(self) -> datetime | None:
        """Issue date as a UTC datetime; None if the stored value is out of range."""
        return try_from_timestamp_utc(self.issue_date)

    @property
    def uploaded_at(self) -> datetime | None:
        """Ledger registration time as a UTC datetime; None if out of range."""
        return try_from_timestamp_utc(self.upload_date)

    def is_empty(self) -> bool:
        """Return True for the zero-value record a contract returns for unknown keys."""
        return not self.document_id
