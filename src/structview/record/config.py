"""
Configuration for the structview.record wrapper.

Defines RecordSettings, a frozen dataclass carrying the conventions the record
wrapper passes into the core when it builds root descriptors. Defaults are
sourced from structview.core.constants.

Precedence
- environment (STRUCTVIEW_*) > TOML > defaults
- TOML search: ./structview.toml ([record] table or top-level keys), then
  ./pyproject.toml under [tool.structview.record]
- An optional .env file is loaded into the environment (without overriding
  variables already set) before environment variables are read.
- default_settings() loads once per process; Struct uses it when no settings
  are passed.

Import DAG discipline
- Depends only on stdlib, python-dotenv and structview.core.constants.
"""

from __future__ import annotations

import functools
import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from structview.core.constants import DEFAULT_TAG_NAME


def _bool(v: Any) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return bool(v)
    if isinstance(v, str):
        return v.strip().lower() in {"1", "true", "t", "yes", "y", "on"}
    return False


@dataclass(frozen=True)
class RecordSettings:
    """
    Runtime settings for structview.record.

    Attributes:
        tag_name (str): Tag key holding the skip marker and `name,option`
            values (default "structs").
        detached (bool): Wrap a deep copy of the record instead of the record
            itself; descriptors are then read-only.
        flatten_embedded (bool): to_map() merges embedded records into their
            parent mapping instead of nesting them under the field name.

    Examples:
        >>> from structview.record.config import RecordSettings
        >>> RecordSettings(tag_name="json")  # doctest: +ELLIPSIS
        RecordSettings(tag_name='json', ...)
    """

    tag_name: str = DEFAULT_TAG_NAME
    detached: bool = False
    flatten_embedded: bool = False

    @classmethod
    def _apply_mapping(cls, base: RecordSettings, cfg: dict[str, Any] | None) -> RecordSettings:
        """Apply a loose config mapping onto RecordSettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base
        if "tag_name" in cfg and isinstance(cfg["tag_name"], str) and cfg["tag_name"].strip():
            s = replace(s, tag_name=cfg["tag_name"].strip())
        if "detached" in cfg:
            s = replace(s, detached=_bool(cfg["detached"]))
        if "flatten_embedded" in cfg:
            s = replace(s, flatten_embedded=_bool(cfg["flatten_embedded"]))
        return s

    @classmethod
    def from_env(
        cls,
        base: RecordSettings | None = None,
        prefix: str = "STRUCTVIEW_",
        env_file: str | os.PathLike[str] | None = None,
    ) -> RecordSettings:
        """
        Build RecordSettings from environment variables. Precedence is env > base > defaults.

        Recognized variables:
            - STRUCTVIEW_TAG_NAME
            - STRUCTVIEW_DETACHED (1/0/true/false/yes/no/on/off)
            - STRUCTVIEW_FLATTEN_EMBEDDED (1/0/true/false/yes/no/on/off)

        Args:
            base: Settings to override; defaults when None.
            prefix: Environment variable prefix.
            env_file: Optional .env file loaded first (existing variables win).
        """
        s = base or cls()
        if env_file is not None:
            load_dotenv(env_file, override=False)

        mapping: dict[str, Any] = {}
        for key in ("tag_name", "detached", "flatten_embedded"):
            v = os.getenv(prefix + key.upper())
            if v:
                mapping[key] = v
        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> RecordSettings:
        """
        Build RecordSettings from a TOML file.

        Search order when `path` is None:
            1) ./structview.toml (with either a [record] table or direct keys)
            2) ./pyproject.toml under [tool.structview.record]

        Returns defaults if no file is present or none carries settings.
        """
        s = cls()

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "structview.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        cfg: dict[str, Any] | None = None
        for p in cand:
            if not p.exists():
                continue
            try:
                with p.open("rb") as fh:
                    data = tomllib.load(fh)
            except (OSError, tomllib.TOMLDecodeError):
                continue
            if p.name == "pyproject.toml":
                cfg = data
                for key in ("tool", "structview", "record"):
                    cfg = cfg.get(key) if isinstance(cfg, dict) else None
            elif isinstance(data.get("record"), dict):
                cfg = data["record"]
            else:
                cfg = data
            if cfg:
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(
        cls,
        path: str | os.PathLike[str] | None = None,
        env_file: str | os.PathLike[str] | None = None,
    ) -> RecordSettings:
        """
        Load RecordSettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults
                (structview.toml, pyproject.toml).
            env_file: Optional .env file merged into the environment first.

        Returns:
            RecordSettings
        """
        s = cls.from_toml(path)
        s = cls.from_env(base=s, env_file=env_file)
        return s


@functools.lru_cache(maxsize=1)
def default_settings() -> RecordSettings:
    """
    Process-wide RecordSettings used by Struct when none are passed.

    Loaded once, on first use, with RecordSettings.load(); call
    ``default_settings.cache_clear()`` to pick up changed files or variables.
    """
    return RecordSettings.load()
