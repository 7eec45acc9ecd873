# tech_scout/crawler/link_extractor.py
"""
Link extraction and filtering utilities for TechScout.
"""
from __future__ import annotations

import posixpath
from typing import FrozenSet, Iterable, List, Tuple
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

from tech_scout.crawler.models import PageUrl, parse_url

#: extensions of pages worth analyzing; paths without an extension also qualify
PAGE_EXTENSIONS: FrozenSet[str] = frozenset({"asp", "aspx", "cgi", "htm", "html", "jsp", "php"})


def extract_references(html: str, base_url: str) -> Tuple[List[str], List[str]]:
    """
    Return absolute ``<a href>`` links and ``<script src>`` references of *html*.

    Ignores mailto:, javascript: and empty hrefs.
    """
    soup = BeautifulSoup(html, "html.parser")
    links: List[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        raw = href_val.strip()
        if not raw or raw.startswith(("mailto:", "javascript:")):
            continue
        links.append(urljoin(base_url, raw))

    scripts: List[str] = []
    for tag in soup.find_all("script", src=True):
        src = tag.get("src") if isinstance(tag, Tag) else None
        if isinstance(src, str) and src.strip():
            scripts.append(urljoin(base_url, src.strip()))
    return links, scripts


def is_page_path(path: str) -> bool:
    """True when the last path segment has no extension or a page-like one."""
    ext = posixpath.splitext(posixpath.basename(path))[1]
    return not ext or ext[1:].lower() in PAGE_EXTENSIONS


def filter_links(links: Iterable[str], hostname: str) -> List[PageUrl]:
    """
    Keep http(s) links on *hostname* that point to page-like paths.

    Fragments are stripped; order is preserved, duplicates are not removed.
    """
    results: List[PageUrl] = []
    for link in links:
        page_url = parse_url(link)
        if (
            page_url.scheme in ("http", "https")
            and page_url.hostname == hostname
            and is_page_path(page_url.path)
        ):
            results.append(page_url)
    return results
