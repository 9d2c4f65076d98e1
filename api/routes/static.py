"""Static file serving from the public root"""

import asyncio
import errno
import logging
from pathlib import Path

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from app.config import Settings
from app.dependencies import get_config

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Static"])

INDEX_DOCUMENT = "index.html"
DEFAULT_CONTENT_TYPE = "application/octet-stream"
NOT_FOUND_BODY = "<h1>404 Not Found</h1>"

MIME_TYPES = {
    ".html": "text/html",
    ".js": "text/javascript",
    ".css": "text/css",
    ".json": "application/json",
    ".png": "image/png",
    ".jpg": "image/jpg",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
}


def content_type_for(path: Path) -> str:
    """Content type from the file extension, case-insensitive."""
    return MIME_TYPES.get(path.suffix.lower(), DEFAULT_CONTENT_TYPE)


def resolve_public_path(public_root: Path, request_path: str) -> Path | None:
    """
    Map a request path onto a file under the public root.

    Args:
        public_root: Directory static files are served from
        request_path: URL path, with or without the leading slash

    Returns:
        Resolved path, or None if it escapes the public root
    """
    relative = request_path.lstrip("/") or INDEX_DOCUMENT
    root = public_root.resolve()
    try:
        candidate = (root / relative).resolve()
    except ValueError:
        # embedded null byte
        return None

    if not candidate.is_relative_to(root):
        return None
    return candidate


def _read_error_body(error: OSError) -> str:
    code = errno.errorcode.get(error.errno, "UNKNOWN") if error.errno else "UNKNOWN"
    return f"Sorry, check with the site admin for error: {code} ..\n"


async def serve_public_file(public_root: Path, request_path: str) -> Response:
    """Read a public file and build the response for it."""
    file_path = resolve_public_path(public_root, request_path)
    if file_path is None:
        logger.warning(f"Rejected path outside public root: {request_path}")
        return HTMLResponse(NOT_FOUND_BODY, status_code=404)

    try:
        content = await asyncio.to_thread(file_path.read_bytes)
    except FileNotFoundError:
        return HTMLResponse(NOT_FOUND_BODY, status_code=404)
    except OSError as e:
        logger.error(f"Failed to read {file_path}: {e}")
        return PlainTextResponse(_read_error_body(e), status_code=500)

    return Response(content=content, media_type=content_type_for(file_path))


@router.get("/", include_in_schema=False)
async def index(settings: Settings = Depends(get_config)):
    """Serve the root HTML document"""
    return await serve_public_file(settings.public_root, INDEX_DOCUMENT)


@router.get("/{file_path:path}", include_in_schema=False)
async def public_file(file_path: str, settings: Settings = Depends(get_config)):
    """Serve any other path from the public root"""
    return await serve_public_file(settings.public_root, file_path)
