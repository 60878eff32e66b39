from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from clarivex.api.deps import get_current_session
from clarivex.domain.entities.identity import UserSession
from clarivex.shared.config import get_settings


router = APIRouter()


def _page(name: str) -> FileResponse:
    return FileResponse(Path(get_settings().pages_dir) / name, media_type="text/html")


@router.get("/", include_in_schema=False)
def index(_session: UserSession = Depends(get_current_session)):
    return _page("index.html")


@router.get("/index.html", include_in_schema=False)
def index_file(_session: UserSession = Depends(get_current_session)):
    return _page("index.html")


@router.get("/pricing.html", include_in_schema=False)
def pricing(_session: UserSession = Depends(get_current_session)):
    return _page("pricing.html")
