# File: tech_scout/content.py
"""tech_scout.content: shaping of page content before it reaches the fingerprint engine.

Two helpers live here:

* :func:`window_html` keeps only the head and tail of oversized markup. A
  "row" is a fixed-width slice of the flat text, not a line, so a minified
  single-line page is cut just like a long multi-line one.
* :func:`extract_js` resolves dotted property chains (``jQuery.fn.jquery``)
  against the page's script global and returns the sparse set of matches.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Dict, Sequence, Union

__all__: Sequence[str] = ("window_html", "resolve_chain", "extract_js")

JsValue = Union[str, int, float, bool]
JsMatches = Dict[str, Dict[str, Dict[int, JsValue]]]


def window_html(html: str, max_cols: int, max_rows: int) -> str:
    """Return *html* reduced to its first and last ``max_rows / 2`` rows.

    Markup that fits in ``max_rows`` rows comes back unchanged, as does any
    markup when either bound is 0. Kept rows are joined with ``"\\n"``.
    """
    if not max_cols or not max_rows:
        return html

    rows = math.ceil(len(html) / max_cols)
    if rows <= max_rows:
        return html

    half = max_rows / 2
    chunks = [
        html[i * max_cols:(i + 1) * max_cols]
        for i in range(rows)
        if i < half or i >= rows - half
    ]
    return "\n".join(chunks)


def _lookup(parent: Any, prop: str) -> Any:
    if isinstance(parent, Mapping):
        return parent.get(prop)
    return getattr(parent, prop, None)


def resolve_chain(root: Any, chain: str) -> JsValue:
    """Follow *chain* from *root*; falsy or missing segments stop the walk.

    Strings and numbers are returned as-is, anything else as a presence flag.
    """
    value: Any = root
    for prop in chain.split("."):
        child = _lookup(value, prop) if value else None
        value = child if child else None
        if value is None:
            break

    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        return value
    return bool(value)


def extract_js(
    script_global: Any,
    patterns: Mapping[str, Mapping[str, Sequence[Any]]],
) -> JsMatches:
    """Build ``{app: {chain: {slot_index: value}}}`` for every resolved chain.

    Only truthy values are recorded; apps and chains without a match are
    left out instead of carrying empty placeholders.
    """
    matches: JsMatches = {}
    if not script_global:
        return matches

    for app_name, chains in patterns.items():
        for chain, slots in chains.items():
            if not slots:
                continue
            value = resolve_chain(script_global, chain)
            if not value:
                continue
            matches.setdefault(app_name, {})[chain] = {
                index: value for index in range(len(slots))
            }
    return matches
