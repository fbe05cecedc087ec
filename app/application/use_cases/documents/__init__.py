"""Document use cases: registration (write) and verification (read)."""

from app.application.use_cases.documents.register_document import (
    DocumentRegistrationService,
)
from app.application.use_cases.documents.verify_document import (
    DocumentVerificationService,
)

__all__ = [
    "DocumentRegistrationService",
    "DocumentVerificationService",
]
