"""Google Sheets API client using service account credentials."""
import logging

from google.oauth2 import service_account
from googleapiclient.discovery import build

from invitation.core.config import Settings

logger = logging.getLogger(__name__)

# Scopes for Google Sheets API
SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

TOKEN_URI = "https://oauth2.googleapis.com/token"


def missing_credentials(settings: Settings) -> list[str]:
    """Names of required settings that are not configured."""
    required = {
        "google_sheet_id": settings.google_sheet_id,
        "google_project_id": settings.google_project_id,
        "google_client_email": settings.google_client_email,
        "google_private_key": settings.google_private_key,
    }
    return [name for name, value in required.items() if not value]


def service_account_info(settings: Settings) -> dict:
    """Service account key in the shape of a downloaded JSON key file."""
    return {
        "type": "service_account",
        "project_id": settings.google_project_id,
        "private_key_id": settings.google_private_key_id,
        # Keys pasted into env vars usually carry literal "\n" sequences
        "private_key": settings.google_private_key.replace("\\n", "\n"),
        "client_email": settings.google_client_email,
        "token_uri": TOKEN_URI,
    }


def get_credentials(settings: Settings) -> service_account.Credentials:
    """Build service account credentials from settings."""
    return service_account.Credentials.from_service_account_info(
        service_account_info(settings), scopes=SCOPES
    )


def get_sheets_service(settings: Settings):
    """Build authenticated Sheets API service."""
    creds = get_credentials(settings)
    return build("sheets", "v4", credentials=creds, cache_discovery=False)
