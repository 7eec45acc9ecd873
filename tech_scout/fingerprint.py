# File: tech_scout/fingerprint.py
"""tech_scout.fingerprint: contract of the technology fingerprinting engine.

The engine owns the pattern database and the scoring. The driver only hands
it page signals and listens for its detections through the callback it
registers with :meth:`FingerprintEngine.bind` before the first page is visited.
"""

from __future__ import annotations

import importlib
from typing import Any, Callable, Dict, Mapping, Protocol, Sequence

from tech_scout.crawler.models import Detection, PageSignals, PageUrl

OnDetected = Callable[[Mapping[str, Detection], Dict[str, Any]], None]
EngineLog = Callable[[str, str, str], None]

__all__ = ["FingerprintEngine", "OnDetected", "EngineLog", "load_engine"]


class FingerprintEngine(Protocol):
    #: app name -> dotted property chain -> pattern slots
    js_patterns: Mapping[str, Mapping[str, Sequence[Any]]]
    #: category id -> {"name": ..., ...}
    categories: Mapping[str, Mapping[str, Any]]

    def bind(self, on_detected: OnDetected, log: EngineLog) -> None: ...

    async def analyze(self, page_url: PageUrl, signals: PageSignals) -> None: ...


def load_engine(spec: str) -> FingerprintEngine:
    """Import ``package.module:attr`` and return the engine it names.

    A class or factory function is called without arguments; any other
    object is returned as the engine itself.
    """
    module_name, sep, attr = spec.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Engine must be given as 'module:attribute', got {spec!r}")
    module = importlib.import_module(module_name)
    try:
        target = getattr(module, attr)
    except AttributeError as exc:
        raise ValueError(f"Module {module_name!r} has no attribute {attr!r}") from exc
    return target() if callable(target) else target
