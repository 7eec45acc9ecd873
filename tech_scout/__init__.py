# tech_scout/__init__.py
"""
TechScout package initializer.
Defines package version and exposes the analysis entry point;
the CLI lives in :mod:`tech_scout.cli`.
"""
__version__ = "0.1.0"

from .scanner import start_analysis  # noqa: E402

__all__ = ["__version__", "start_analysis"]
