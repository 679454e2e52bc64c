# qa_copilot/api/crawl.py
"""
POST /api/crawl - fetch a page and return sanitized HTML for htmlContext.
"""
from fastapi import APIRouter
from pydantic import BaseModel
from starlette.responses import JSONResponse
from typing import Optional

from qa_copilot.core.logging import log
from qa_copilot.lib.html_sanitizer import crawl

router = APIRouter(prefix="/api", tags=["Crawl"])


class CrawlRequest(BaseModel):
    url: Optional[str] = None


@router.post("/crawl")
async def crawl_url(data: CrawlRequest):
    url = (data.url or "").strip()
    if not url:
        return JSONResponse(status_code=400, content={"error": "URL is required"})
    if not url.lower().startswith("http"):
        return JSONResponse(status_code=400, content={"error": "URL must start with http:// or https://"})

    log("CRAWL", f"Fetching {url}")
    try:
        html = await crawl(url)
    except Exception as e:
        log("ERROR", f"Crawl failed for {url}: {e}")
        return JSONResponse(status_code=500, content={"error": str(e) or "Failed to crawl URL"})

    log("CRAWL", f"✅ {len(html)} chars of cleaned HTML")
    return {"html": html, "message": "Successfully crawled"}
