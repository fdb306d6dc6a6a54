"""RSVP routes for recording and listing guest responses."""
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from invitation.core.dependencies import get_persistence
from invitation.models import ResponseRecord, RSVPSubmission, RSVPValidationError
from invitation.sheets.persistence import RSVPPersistence

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["rsvp"])


# Plain def: the Sheets client blocks, so these run in the thread pool
@router.post("/rsvp")
def submit_rsvp(
    submission: RSVPSubmission,
    persistence: RSVPPersistence = Depends(get_persistence),
):
    """
    Record a guest's RSVP.

    Returns 400 with an error message if name or attendance is missing.
    Otherwise the response is stored in Google Sheets, or in local memory
    when the sheet is unavailable, and the call reports success either way.
    """
    try:
        persistence.submit(submission)
    except RSVPValidationError as e:
        logger.info(f"Rejected RSVP: {e}")
        return JSONResponse(status_code=400, content={"error": str(e)})

    return {"success": True}


@router.get("/responses", response_model=list[ResponseRecord])
def list_responses(persistence: RSVPPersistence = Depends(get_persistence)):
    """
    List all recorded responses.

    Reads from Google Sheets when it is reachable, falling back to the
    responses held in local memory.
    """
    return persistence.list_responses()
