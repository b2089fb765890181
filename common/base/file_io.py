"""Helpers for reading configuration files with consistent defaults."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Mapping

import yaml


DEFAULT_ENCODING = "utf-8"


def _to_path(path: Path | str) -> Path:
    return Path(path).expanduser()


@contextmanager
def open_text(path: Path | str, mode: str = "r", *, encoding: str = DEFAULT_ENCODING) -> Iterator[Any]:
    if "b" in mode:
        raise ValueError("open_text does not support binary mode")
    with open(_to_path(path), mode, encoding=encoding) as handle:
        yield handle


def read_yaml(path: Path | str) -> Mapping[str, Any] | list[Any]:
    """Parse a YAML document; an empty file yields an empty mapping."""
    with open_text(path) as handle:
        try:
            data = yaml.safe_load(handle)
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    return data if data is not None else {}
