# tech_scout/crawler/browser.py
"""
Browser module: navigates one URL and reports what a fingerprint engine needs.

The driver creates one browser per page visit, so implementations may keep
per-visit state (sessions, pages) on the instance.
"""
from __future__ import annotations

import asyncio
from typing import Callable, Dict, Optional, Protocol

from aiohttp import BasicAuth, ClientError, ClientSession, ClientTimeout

from tech_scout.config import CrawlOptions
from tech_scout.crawler.link_extractor import extract_references
from tech_scout.crawler.models import BrowserResult

BrowserLog = Callable[..., None]

__all__ = ("Browser", "BrowserFactory", "HttpBrowser", "make_browser")


def _ignore(message: str, level: str = "debug") -> None:
    return None


class Browser(Protocol):
    log: BrowserLog

    async def navigate(self, url: str) -> BrowserResult:
        """Load *url*; ``status_code`` is 0 when nothing came back."""
        ...


BrowserFactory = Callable[[CrawlOptions], Browser]


class HttpBrowser:
    """Plain HTTP browser built on aiohttp; it does not execute scripts."""

    def __init__(self, options: CrawlOptions) -> None:
        self.options = options
        self.log: BrowserLog = _ignore

    async def navigate(self, url: str) -> BrowserResult:
        timeout = ClientTimeout(total=self.options.timeout)
        auth = BasicAuth(self.options.username, self.options.password) if self.options.username else None
        try:
            async with ClientSession(
                timeout=timeout,
                headers={"User-Agent": self.options.user_agent},
                raise_for_status=False,
            ) as session:
                async with session.get(url, proxy=self.options.proxy, auth=auth) as resp:
                    content_type = resp.headers.get("Content-Type")
                    headers: Dict[str, str] = {k.lower(): v for k, v in resp.headers.items()}
                    cookies = {name: morsel.value for name, morsel in resp.cookies.items()}
                    html = ""
                    if content_type is None or "html" in content_type.lower():
                        html = await resp.text(errors="replace")
                    final_url = str(resp.url)
                    status = resp.status
        except (ClientError, asyncio.TimeoutError) as exc:
            self.log(f"Request failed; url: {url}; {type(exc).__name__}: {exc}", "error")
            return BrowserResult(status_code=0)

        links, scripts = extract_references(html, final_url) if html else ([], [])
        self.log(f"Loaded; url: {url}; status: {status}; links: {len(links)}")
        return BrowserResult(
            status_code=status,
            content_type=content_type,
            cookies=cookies,
            headers=headers,
            html=html,
            js={},
            scripts=scripts,
            links=links,
        )


def make_browser(factory: BrowserFactory, options: CrawlOptions, log: Optional[BrowserLog] = None) -> Browser:
    browser = factory(options)
    if log is not None:
        browser.log = log
    return browser
