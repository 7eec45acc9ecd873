# === FILE: tech_scout/crawler/driver.py ===
from __future__ import annotations

import asyncio
import re
import time
from typing import Any, Dict, List, Mapping, Optional, Sequence

from tech_scout.config import CrawlOptions
from tech_scout.content import extract_js, window_html
from tech_scout.crawler.browser import BrowserFactory, make_browser
from tech_scout.crawler.link_extractor import filter_links
from tech_scout.crawler.models import (
    CrawlResult,
    DetectedApplication,
    Detection,
    PageSignals,
    PageUrl,
    VisitErrorInfo,
    VisitRecord,
    parse_url,
)
from tech_scout.errors import ErrorType, VisitError
from tech_scout.events import EventEmitter
from tech_scout.fingerprint import FingerprintEngine
from tech_scout.logger import logger, to_level

__all__ = ("Driver",)

_HTML_RE = re.compile(r"\btext/html\b", re.IGNORECASE)


class Driver(EventEmitter):
    """Crawls a site from one seed URL and feeds every page to a fingerprint engine.

    Pages are visited in batches of ``chunk_size``: members of a batch run
    concurrently, batches run one after another, and links found by a batch
    are followed (one level deeper) before the next batch starts.

    Events: ``log`` with ``{"message", "source", "level"}`` and ``visit``
    with ``{"browser", "page_url"}``.
    """

    def __init__(
        self,
        browser_cls: BrowserFactory,
        page_url: str,
        engine: FingerprintEngine,
        options: Optional[CrawlOptions] = None,
    ) -> None:
        super().__init__()
        self.options = options if options is not None else CrawlOptions()
        self.orig_page_url = parse_url(page_url)
        if self.orig_page_url.scheme not in ("http", "https") or not self.orig_page_url.hostname:
            raise ValueError(f"Not an http(s) URL: {page_url!r}")
        self.browser_cls = browser_cls
        self.analyzed_page_urls: Dict[str, VisitRecord] = {}
        self.apps: List[DetectedApplication] = []
        self.meta: Dict[str, Any] = {}
        self.started = time.monotonic()

        self.engine = engine
        self.engine.bind(self.display_apps, self.log)

    # ------------------------------------------------------------------ #
    # Entry point                                                        #
    # ------------------------------------------------------------------ #

    async def analyze(self) -> CrawlResult:
        self.started = time.monotonic()
        loop = asyncio.get_running_loop()
        previous = loop.get_exception_handler()
        loop.set_exception_handler(self._uncaught)
        try:
            return await self.crawl(self.orig_page_url)
        finally:
            loop.set_exception_handler(previous)

    def _uncaught(self, loop: asyncio.AbstractEventLoop, context: Dict[str, Any]) -> None:
        exc = context.get("exception")
        message = str(exc) if exc is not None else context.get("message", "")
        self.log(f"Uncaught exception: {message}", "driver", "error")

    # ------------------------------------------------------------------ #
    # Aggregation                                                        #
    # ------------------------------------------------------------------ #

    def log(self, message: str, source: str = "driver", level: str = "debug") -> None:
        if self.options.debug:
            logger.log(to_level(level), "[%s] %s", source, message)
        self.emit("log", {"message": message, "source": source, "level": level})

    def display_apps(self, detected: Mapping[str, Detection], meta: Optional[Dict[str, Any]] = None) -> None:
        """Engine callback: keep the latest meta and the first sighting of each app."""
        self.meta = meta or {}
        known = {app.name for app in self.apps}

        for app in detected.values():
            if app.name in known:
                continue
            categories = []
            for cat_id in app.categories:
                category = self.engine.categories.get(str(cat_id), {})
                categories.append({str(cat_id): category.get("name", str(cat_id))})
            self.apps.append(
                DetectedApplication(
                    name=app.name,
                    confidence=int(app.confidence_total),
                    version=app.version or None,
                    icon=app.icon or "default.svg",
                    website=app.website,
                    categories=categories,
                )
            )
            known.add(app.name)

    def snapshot(self) -> CrawlResult:
        return CrawlResult(
            urls=dict(self.analyzed_page_urls),
            applications=list(self.apps),
            meta=self.meta,
        )

    # ------------------------------------------------------------------ #
    # Scheduling                                                         #
    # ------------------------------------------------------------------ #

    async def fetch(self, page_url: PageUrl, index: int, depth: int) -> List[PageUrl]:
        # check and insert happen with no await in between
        if (
            page_url.href in self.analyzed_page_urls
            or len(self.analyzed_page_urls) >= self.options.max_urls
        ):
            return []

        self.analyzed_page_urls[page_url.href] = VisitRecord(status=0)

        timer_scope = {"last": time.monotonic()}
        delay = self.options.effective_delay * index
        self.timer(f"fetch; url: {page_url.href}; depth: {depth}; delay: {delay}ms", timer_scope)

        if delay:
            await asyncio.sleep(delay / 1000)

        return await self.visit(page_url, timer_scope)

    async def _fetch_safely(self, page_url: PageUrl, index: int, depth: int) -> List[PageUrl]:
        try:
            return await self.fetch(page_url, index, depth)
        except VisitError as exc:
            error_type = exc.error_type
        except Exception as exc:
            self.log(f"{type(exc).__name__}: {exc}; url: {page_url.href}", "driver", "debug")
            error_type = ErrorType.UNKNOWN_ERROR

        record = self.analyzed_page_urls.get(page_url.href)
        if record is not None:
            record.error = VisitErrorInfo.from_type(error_type)
        self.log(f"{error_type.message}; url: {page_url.href}", "driver", "error")
        return []

    async def visit(self, page_url: PageUrl, timer_scope: Dict[str, float]) -> List[PageUrl]:
        browser = make_browser(
            self.browser_cls,
            self.options,
            lambda message, level="debug": self.log(message, "browser", level),
        )

        self.timer(f"visit start; url: {page_url.href}", timer_scope)
        result = await browser.navigate(page_url.href)
        self.timer(f"visit end; url: {page_url.href}", timer_scope)

        self.analyzed_page_urls[page_url.href].status = result.status_code or 0

        if not result.status_code:
            raise VisitError(ErrorType.NO_RESPONSE)

        if result.status_code != 200:
            raise VisitError(ErrorType.RESPONSE_NOT_OK)

        if result.content_type and not _HTML_RE.search(result.content_type):
            self.log(f"Skipping; url: {page_url.href}; content type: {result.content_type}", "driver")
            del self.analyzed_page_urls[page_url.href]
            return []

        signals = PageSignals(
            cookies=result.cookies,
            headers=result.headers,
            html=window_html(result.html or "", self.options.html_max_cols, self.options.html_max_rows),
            js=extract_js(result.js, self.engine.js_patterns),
            scripts=result.scripts,
        )
        await self.engine.analyze(page_url, signals)

        links = filter_links(result.links, self.orig_page_url.hostname)

        self.emit("visit", {"browser": result, "page_url": page_url})
        return links

    # ------------------------------------------------------------------ #
    # Traversal                                                          #
    # ------------------------------------------------------------------ #

    async def crawl(self, page_url: PageUrl, index: int = 0, depth: int = 1) -> CrawlResult:
        self.log(f"crawl; url: {page_url.canonical}; depth: {depth}", "driver")
        links = await self._fetch_safely(page_url, index, depth)
        await self._descend([links], depth)
        return self.snapshot()

    async def run_chunks(self, links: Sequence[PageUrl], depth: int) -> None:
        pending = list(links)
        chunk = 0
        while pending:
            batch, pending = pending[: self.options.chunk_size], pending[self.options.chunk_size:]
            self.log(f"chunk {chunk}; depth: {depth}; size: {len(batch)}", "driver")
            found = await asyncio.gather(
                *(self._fetch_safely(link, index, depth) for index, link in enumerate(batch))
            )
            await self._descend(found, depth)
            chunk += 1

    async def _descend(self, found: Sequence[List[PageUrl]], depth: int) -> None:
        if not self.options.recursive or depth >= self.options.max_depth:
            return
        children = [link for links in found for link in links[: self.options.max_urls]]
        if children:
            await self.run_chunks(children, depth + 1)

    def timer(self, message: str, scope: Dict[str, float]) -> None:
        now = time.monotonic()
        since_start = round(now - self.started, 2)
        since_last = round(now - scope["last"], 2)
        self.log(f"[timer] {message}; lapsed: {since_last}s / {since_start}s", "driver")
        scope["last"] = now
