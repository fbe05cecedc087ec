"""Document API schemas (camelCase on the wire)."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.domain.entities.document_record import DocumentRecord


class CamelModel(BaseModel):
    """Base for response models serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DocumentRegistrationResponse(CamelModel):
    """Response for POST /documents. encryption_key is shown exactly once."""

    success: bool = True
    document_id: str
    document_hash: str
    encryption_key: str = Field(..., description="Hex AES key; store it, it is not kept")
    qr_code: str | None = Field(
        default=None, description="Not rendered; encode verification_url client-side"
    )
    transaction_hash: str
    verification_url: str


class DocumentRecordResponse(CamelModel):
    """Ledger record as returned by the verification endpoints."""

    document_id: str
    document_hash: str
    owner_id: str
    owner_name: str
    document_type: str
    issuer_organization: str
    # ISO-8601 UTC; the raw ledger seconds when datetime cannot represent them.
    issue_date: datetime | int
    upload_date: datetime | int
    uploader: str
    is_valid: bool

    @classmethod
    def from_record(cls, record: DocumentRecord) -> "DocumentRecordResponse":
        return cls(
            document_id=record.document_id,
            document_hash=record.document_hash,
            owner_id=record.owner_id,
            owner_name=record.owner_name,
            document_type=record.document_type,
            issuer_organization=record.issuer_organization,
            issue_date=record.issued_at or record.issue_date,
            upload_date=record.uploaded_at or record.upload_date,
            uploader=record.uploader,
            is_valid=record.is_valid,
        )
