# tech_scout/crawler/models.py
"""
Data models for the TechScout crawler.
"""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional
from urllib.parse import urlsplit, urlunsplit

from tech_scout.errors import ErrorType

__all__ = (
    "PageUrl",
    "parse_url",
    "VisitErrorInfo",
    "VisitRecord",
    "Detection",
    "DetectedApplication",
    "PageSignals",
    "BrowserResult",
    "CrawlResult",
)


@dataclass(frozen=True, slots=True)
class PageUrl:
    """A parsed URL. ``href`` has no fragment and is the crawl's dedup key."""

    href: str
    scheme: str
    netloc: str
    hostname: str
    path: str
    query: str = ""

    @property
    def canonical(self) -> str:
        """Scheme, host and path only."""
        return f"{self.scheme}://{self.netloc}{self.path}"

    def __str__(self) -> str:
        return self.href


def parse_url(url: str) -> PageUrl:
    """Parse *url* into a :class:`PageUrl`, dropping the fragment."""
    parts = urlsplit(url.strip())
    scheme = parts.scheme.lower()
    # host is case-insensitive, userinfo is not
    userinfo, at, hostport = parts.netloc.rpartition("@")
    netloc = f"{userinfo}{at}{hostport.lower()}"
    path = parts.path or "/"
    href = urlunsplit((scheme, netloc, path, parts.query, ""))
    return PageUrl(
        href=href,
        scheme=scheme,
        netloc=netloc,
        hostname=(parts.hostname or "").lower(),
        path=path,
        query=parts.query,
    )


@dataclass(slots=True)
class VisitErrorInfo:
    type: str
    message: str

    @classmethod
    def from_type(cls, error_type: ErrorType) -> VisitErrorInfo:
        return cls(type=error_type.name, message=error_type.message)


@dataclass(slots=True)
class VisitRecord:
    """Outcome of one scheduled URL; ``status`` stays 0 until a response arrives."""

    status: int = 0
    error: Optional[VisitErrorInfo] = None


@dataclass(slots=True)
class Detection:
    """One application as reported by the fingerprint engine."""

    name: str
    confidence_total: int = 100
    version: Optional[str] = None
    categories: List[str] = field(default_factory=list)
    icon: Optional[str] = None
    website: Optional[str] = None


@dataclass(slots=True)
class DetectedApplication:
    name: str
    confidence: int
    version: Optional[str]
    icon: str
    website: Optional[str]
    categories: List[Dict[str, str]] = field(default_factory=list)


@dataclass(slots=True)
class PageSignals:
    """Everything the fingerprint engine gets to see of one page."""

    cookies: Dict[str, str]
    headers: Dict[str, str]
    html: str
    js: Dict[str, Any]
    scripts: List[str]


@dataclass(slots=True)
class BrowserResult:
    """What a browser brings back from one navigation."""

    status_code: int = 0
    content_type: Optional[str] = None
    cookies: Dict[str, str] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    html: str = ""
    js: Any = None
    scripts: List[str] = field(default_factory=list)
    links: List[str] = field(default_factory=list)


@dataclass(slots=True)
class CrawlResult:
    """Snapshot of an analysis: visited URLs, detected applications and meta."""

    urls: Dict[str, VisitRecord] = field(default_factory=dict)
    applications: List[DetectedApplication] = field(default_factory=list)
    meta: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        urls: Dict[str, Any] = {}
        for href, record in self.urls.items():
            entry: Dict[str, Any] = {"status": record.status}
            if record.error is not None:
                entry["error"] = asdict(record.error)
            urls[href] = entry
        return {
            "urls": urls,
            "applications": [asdict(app) for app in self.applications],
            "meta": self.meta,
        }

    def json(self, *, pretty: bool = False) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None, default=str)
