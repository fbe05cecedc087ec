"""Domain entities.

Pure domain models; no ledger client or storage concerns.
"""

from app.domain.entities.document_record import DocumentRecord

__all__ = ["DocumentRecord"]
