"""
Student Records API - Landing Page Route
==========================================

What:  GET / serves the static landing page configured by LANDING_PAGE.
"""

from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse

from student_api.config import settings
from student_api.exceptions import NotFoundError

router = APIRouter(tags=["Pages"])


@router.get(
    "/",
    response_class=FileResponse,
    include_in_schema=False,
)
async def landing_page() -> FileResponse:
    page = Path(settings.landing_page)
    if not page.is_file():
        raise NotFoundError("Landing page not found", resource="page", resource_id=page.name)
    return FileResponse(path=str(page), media_type="text/html")
