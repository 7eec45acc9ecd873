# File: tests/conftest.py
from __future__ import annotations

import asyncio
from typing import Dict, List, Optional

import pytest

from tech_scout.config import CrawlOptions
from tech_scout.crawler.models import BrowserResult, Detection

SEED = "http://example.com/"


def html_page(*links: str, html: str = "<html><body>page</body></html>", **kwargs) -> BrowserResult:
    """A 200 text/html result linking to *links*."""
    return BrowserResult(
        status_code=kwargs.pop("status_code", 200),
        content_type=kwargs.pop("content_type", "text/html; charset=utf-8"),
        html=html,
        links=list(links),
        **kwargs,
    )


class FakeSite:
    """In-memory website; ``site.browser`` is used as the driver's browser class."""

    def __init__(self, pages: Dict[str, BrowserResult], latency: float = 0.01,
                 latencies: Optional[Dict[str, float]] = None) -> None:
        self.pages = pages
        self.latency = latency
        self.latencies = latencies or {}
        self.requests: List[str] = []
        self.started: Dict[str, float] = {}
        self.finished: Dict[str, float] = {}
        self.in_flight = 0
        self.peak = 0
        self.options: List[CrawlOptions] = []

    def browser(self, options: CrawlOptions) -> "FakeBrowser":
        self.options.append(options)
        return FakeBrowser(self)


class FakeBrowser:
    def __init__(self, site: FakeSite) -> None:
        self.site = site
        self.log = lambda message, level="debug": None

    async def navigate(self, url: str) -> BrowserResult:
        site = self.site
        loop = asyncio.get_running_loop()
        site.requests.append(url)
        site.started[url] = loop.time()
        site.in_flight += 1
        site.peak = max(site.peak, site.in_flight)
        try:
            await asyncio.sleep(site.latencies.get(url, site.latency))
            page = site.pages.get(url)
            if isinstance(page, Exception):
                raise page
            return page if page is not None else BrowserResult(status_code=404, content_type="text/html")
        finally:
            site.in_flight -= 1
            site.finished[url] = loop.time()


class FakeEngine:
    """Records every analyzed page and reports canned detections per href."""

    def __init__(self, detections: Optional[Dict[str, List[Detection]]] = None,
                 js_patterns: Optional[dict] = None) -> None:
        self.detections = detections or {}
        self.js_patterns = js_patterns or {}
        self.categories = {
            "1": {"name": "CMS"},
            "12": {"name": "JavaScript frameworks"},
            "59": {"name": "JavaScript libraries"},
        }
        self.calls: list = []
        self.on_detected = None
        self.log = None

    def bind(self, on_detected, log) -> None:
        self.on_detected = on_detected
        self.log = log

    async def analyze(self, page_url, signals) -> None:
        self.calls.append((page_url, signals))
        found = self.detections.get(page_url.href, [])
        self.on_detected({d.name: d for d in found}, {"language": "en", "url": page_url.href})


@pytest.fixture()
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture()
def recursive_options() -> CrawlOptions:
    """Recursive crawl without pacing, so tests stay fast."""
    return CrawlOptions(recursive=True, delay=0, max_depth=3, max_urls=50, chunk_size=5)
