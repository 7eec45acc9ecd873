# tech_scout/crawler/__init__.py
"""Crawl scheduling: URL models, link filtering, browsers and the driver."""
