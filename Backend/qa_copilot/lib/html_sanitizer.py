# qa_copilot/lib/html_sanitizer.py
"""
HTML fetch + sanitize for the crawl endpoint.

Produces the `htmlContext` input of a generate request: primary content
only, no scripts/styles/SVG/comments, whitespace collapsed, length capped.
"""
import asyncio
import re
from typing import Optional

import aiohttp
from bs4 import BeautifulSoup, Comment

from qa_copilot.core.config import settings


# Tags that carry no selectors worth testing against
STRIP_TAGS = ["script", "style", "svg", "link", "meta", "noscript", "iframe"]

TRUNCATION_MARKER = "...(truncated)"


class CrawlError(Exception):
    """Fetching the page failed."""
    pass


def sanitize_html(html: str, max_length: Optional[int] = None) -> str:
    """
    Strip non-content markup and return the primary content as compact HTML.

    Prefers <main>, then <body>, then the whole document.
    """
    max_length = max_length if max_length is not None else settings.crawl.max_html_length
    soup = BeautifulSoup(html, "html.parser")

    for tag in soup.find_all(STRIP_TAGS):
        tag.decompose()

    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()

    clean = ""
    for name in ("main", "body"):
        container = soup.find(name)
        if container is not None:
            clean = container.decode_contents()
            if clean.strip():
                break
    if not clean.strip():
        clean = str(soup)

    clean = re.sub(r"\s+", " ", clean).strip()

    if len(clean) > max_length:
        clean = clean[:max_length] + TRUNCATION_MARKER

    return clean


async def fetch_html(url: str) -> str:
    """Fetch a page with a browser User-Agent."""
    headers = {"User-Agent": settings.crawl.user_agent}
    timeout = aiohttp.ClientTimeout(total=settings.crawl.timeout)
    try:
        async with aiohttp.ClientSession() as session:
            async with session.get(url, headers=headers, timeout=timeout) as response:
                if response.status != 200:
                    raise CrawlError(f"Failed to fetch URL: {response.status} {response.reason}")
                return await response.text()
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise CrawlError(f"Failed to fetch URL: {e}")


async def crawl(url: str) -> str:
    html = await fetch_html(url)
    return sanitize_html(html)
