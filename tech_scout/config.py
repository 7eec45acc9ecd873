# === FILE: tech_scout/config.py ===
"""
Loading and validation of crawl options for TechScout.
Pydantic describes the schema; YAML and JSON files are accepted.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel


def _as_flag(v: Any) -> Any:
    """Coerce numeric spellings ("0", "1", 2) of a flag to bool."""
    if isinstance(v, str) and v.strip().lstrip("+-").isdigit():
        return bool(int(v))
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return bool(v)
    return v


class CrawlOptions(BaseModel):
    """Options for one analysis run; built once and never mutated."""
    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    password: str = Field("", description="Password for HTTP authentication.")
    proxy: Optional[str] = Field(None, description="Proxy URL passed to the browser.")
    username: str = Field("", description="Username for HTTP authentication.")
    chunk_size: int = Field(5, ge=1, description="Number of pages visited concurrently per batch.")
    debug: bool = Field(False, description="Write driver log lines to the project logger.")
    delay: int = Field(500, ge=0, description="Pacing step between batch members (ms).")
    html_max_cols: int = Field(2000, ge=0, description="Width of a markup row.")
    html_max_rows: int = Field(3000, ge=0, description="Rows kept from head and tail of the markup.")
    max_depth: int = Field(3, ge=1, description="Maximum link depth, the seed being depth 1.")
    max_urls: int = Field(10, ge=1, description="Cap on the number of recorded URLs.")
    max_wait: int = Field(5000, gt=0, description="Per-page timeout (ms).")
    recursive: bool = Field(False, description="Follow links found on analyzed pages.")
    user_agent: str = Field("Mozilla/5.0 (compatible; TechScout)", min_length=1)

    @field_validator("debug", "recursive", mode="before")
    def _numeric_flag(cls, v: Any) -> Any:
        return _as_flag(v)

    @property
    def effective_delay(self) -> int:
        """Pacing step actually applied; pages are never paced without recursion."""
        return self.delay if self.recursive else 0

    @property
    def timeout(self) -> float:
        """Per-page timeout in seconds."""
        return self.max_wait / 1000


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> CrawlOptions:
    """
    Read YAML or JSON and return validated CrawlOptions.

    Without a path ``configs/default.yaml`` is used when it exists, otherwise
    the defaults. An explicit path that does not exist raises FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return CrawlOptions()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    return CrawlOptions(**data)


def override(options: CrawlOptions, **changes: Any) -> CrawlOptions:
    """Return a re-validated copy of *options* with non-None *changes* applied."""
    data = options.model_dump()
    data.update({k: v for k, v in changes.items() if v is not None})
    return CrawlOptions.model_validate(data)


__all__ = ["CrawlOptions", "ValidationError", "load_config", "override"]
