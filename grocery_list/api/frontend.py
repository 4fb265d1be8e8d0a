"""Static frontend serving with single-page-app fallback."""

import logging
from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import FileResponse, HTMLResponse, PlainTextResponse, Response

from grocery_list.api.dependencies import get_app_settings
from grocery_list.config import Settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["frontend"])

INDEX_HTML = "index.html"
DEMO_PLACEHOLDER = "__IS_DEMO__"


def not_found() -> Response:
    return PlainTextResponse("404", status_code=status.HTTP_404_NOT_FOUND)


def render_index(settings: Settings) -> Response:
    """Serve index.html with the demo flag filled in."""
    index_path = settings.static_dir / INDEX_HTML
    if not index_path.is_file():
        logger.warning(f"Frontend index not found at {index_path}")
        return not_found()

    template = index_path.read_text(encoding="utf-8")
    return HTMLResponse(template.replace(DEMO_PLACEHOLDER, str(settings.is_demo).lower()))


def resolve_asset(static_dir: Path, path: str) -> Path | None:
    """Map a request path to a file inside ``static_dir``, or None."""
    root = static_dir.resolve()
    candidate = (root / path).resolve()
    if not candidate.is_relative_to(root) or not candidate.is_file():
        return None
    return candidate


@router.get("/{full_path:path}", include_in_schema=False)
def static_handler(full_path: str, settings: Annotated[Settings, Depends(get_app_settings)]):
    """Serve a static asset, or index.html so client-side routes work."""
    path = full_path.strip("/")

    if not path or path == INDEX_HTML:
        return render_index(settings)

    asset = resolve_asset(settings.static_dir, path)
    if asset is not None:
        return FileResponse(asset)

    if "." in path:
        return not_found()

    return render_index(settings)
