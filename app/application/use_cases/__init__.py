"""Application use cases: one entry point per workflow."""

from app.application.use_cases.documents import (
    DocumentRegistrationService,
    DocumentVerificationService,
)

__all__ = [
    "DocumentRegistrationService",
    "DocumentVerificationService",
]
