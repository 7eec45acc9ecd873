# === FILE: tech_scout/scanner.py ===
"""
Wrapper module for starting an analysis.
"""
from typing import Any, Callable, Mapping, Optional, Sequence

from tech_scout.config import CrawlOptions
from tech_scout.crawler.browser import BrowserFactory, HttpBrowser
from tech_scout.crawler.driver import Driver
from tech_scout.crawler.models import CrawlResult
from tech_scout.fingerprint import FingerprintEngine


async def start_analysis(
    url: str,
    options: CrawlOptions,
    engine: FingerprintEngine,
    browser_cls: BrowserFactory = HttpBrowser,
    listeners: Optional[Mapping[str, Sequence[Callable[[Any], None]]]] = None,
) -> CrawlResult:
    """
    Crawl *url* with a fresh Driver and return its result.

    Parameters
    ----------
    url : str
        Seed URL.
    options : CrawlOptions
        Crawl configuration.
    engine : FingerprintEngine
        Engine that classifies each visited page.
    browser_cls : BrowserFactory
        Called once per page with the options; HttpBrowser by default.
    listeners : mapping, optional
        Event name (``"log"``, ``"visit"``) to callbacks registered before the crawl.

    Returns
    -------
    CrawlResult
        Visited URLs with status and error, detected applications and meta.
    """
    driver = Driver(browser_cls, url, engine, options)
    for event, callbacks in (listeners or {}).items():
        for callback in callbacks:
            driver.on(event, callback)
    return await driver.analyze()

__all__ = ["start_analysis"]
