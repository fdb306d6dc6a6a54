"""Gallery image listing."""
import logging
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from invitation.core.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["images"])

IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp", ".gif"}
IMAGES_URL_PREFIX = "/assets/images"


def list_images(images_dir: Path) -> list[dict]:
    """Image files in ``images_dir`` sorted by name. Missing directory gives []."""
    if not images_dir.is_dir():
        return []

    files = sorted(
        path.name
        for path in images_dir.iterdir()
        if path.suffix.lower() in IMAGE_EXTENSIONS and path.is_file()
    )
    return [{"name": name, "path": f"{IMAGES_URL_PREFIX}/{name}"} for name in files]


@router.get("/images")
async def images():
    """
    List gallery images.

    Returns the images under the static assets directory with the URL
    path the page uses to load them.
    """
    try:
        return list_images(settings.static_dir / "assets" / "images")
    except OSError as e:
        logger.error(f"Error loading images: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to load images"})
