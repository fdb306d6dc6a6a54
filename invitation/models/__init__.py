from invitation.models.response import (
    ResponseRecord,
    RSVPSubmission,
    RSVPValidationError,
    StoreResult,
)

__all__ = ["ResponseRecord", "RSVPSubmission", "RSVPValidationError", "StoreResult"]
