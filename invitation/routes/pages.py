"""Static page serving with fallback to the single page for client-side routes."""
from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse

from invitation.core.config import settings

router = APIRouter(tags=["pages"])


@router.get("/{full_path:path}", include_in_schema=False)
async def page(full_path: str):
    """
    Serve a static file, or index.html for any path that is not one.

    Paths resolving outside the static directory are treated as unknown.
    """
    static_dir = settings.static_dir.resolve()
    candidate = (static_dir / full_path).resolve()
    if candidate.is_relative_to(static_dir) and candidate.is_file():
        return FileResponse(candidate)

    index = static_dir / "index.html"
    if not index.is_file():
        raise HTTPException(status_code=404, detail="Page not found")
    return FileResponse(index)
