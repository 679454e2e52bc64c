# qa_copilot/api/export.py
"""
POST /api/export - download generated files as a runnable project ZIP.
"""
from fastapi import APIRouter
from pydantic import BaseModel
from starlette.responses import Response
from typing import List, Optional

from qa_copilot.core.constants import DEFAULT_FRAMEWORK, FixtureFormat
from qa_copilot.core.logging import log
from qa_copilot.lib.packaging import archive_name, build_project_zip

router = APIRouter(prefix="/api", tags=["Export"])


class ExportFile(BaseModel):
    path: str
    content: str = ""


class ExportFixture(BaseModel):
    content: str = ""
    format: FixtureFormat = FixtureFormat.JSON
    name: Optional[str] = None


class ExportRequest(BaseModel):
    framework: str = DEFAULT_FRAMEWORK
    files: List[ExportFile] = []
    fixtures: List[ExportFixture] = []


@router.post("/export")
async def export_project(data: ExportRequest):
    # MissingInputError on an empty list is rendered by the app-level handler
    payload = build_project_zip(
        data.framework,
        [f.model_dump() for f in data.files],
        [f.model_dump() for f in data.fixtures],
    )
    filename = archive_name(data.framework)

    log("EXPORT", f"📦 {filename} ({len(data.files)} files, {len(data.fixtures)} fixtures, {len(payload)} bytes)")
    return Response(
        content=payload,
        media_type="application/zip",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
