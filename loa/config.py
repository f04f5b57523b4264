from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Optional, Union

import yaml

from loa.core import DEFAULT_MOVE_LIMIT

if TYPE_CHECKING:
    from loa.search import SearchConfig

PLAYER_KINDS = ("human", "ai", "random")


class ConfigurationError(ValueError):
    pass


@dataclass
class GameConfig:
    move_limit: int = DEFAULT_MOVE_LIMIT
    search_depth: int = 3
    time_limit_sec: Optional[float] = None
    black: str = "human"
    white: str = "ai"
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if not isinstance(self.move_limit, int) or self.move_limit < 1:
            raise ConfigurationError(f"move_limit must be a positive integer, got {self.move_limit!r}")
        if not isinstance(self.search_depth, int) or self.search_depth < 1:
            raise ConfigurationError(f"search_depth must be a positive integer, got {self.search_depth!r}")
        if self.time_limit_sec is not None and not (
            isinstance(self.time_limit_sec, (int, float)) and self.time_limit_sec > 0
        ):
            raise ConfigurationError(f"time_limit_sec must be positive, got {self.time_limit_sec!r}")
        for side in ("black", "white"):
            kind = getattr(self, side)
            if kind not in PLAYER_KINDS:
                raise ConfigurationError(f"{side} must be one of {PLAYER_KINDS}, got {kind!r}")

    def search_config(self) -> SearchConfig:
        from loa.search import SearchConfig

        return SearchConfig(depth=self.search_depth, time_limit_sec=self.time_limit_sec)

    def with_overrides(self, **overrides: Any) -> "GameConfig":
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values.update({key: value for key, value in overrides.items() if value is not None})
        return from_dict(values)


def from_dict(data: Dict[str, Any]) -> GameConfig:
    known = {f.name for f in fields(GameConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")
    return GameConfig(**data)


def load_config(path: Union[str, Path, None]) -> GameConfig:
    """Read a YAML game configuration; a missing file gives the defaults."""
    if path is None:
        return GameConfig()
    cfg_path = Path(path)
    if not cfg_path.exists():
        return GameConfig()
    try:
        data = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Could not parse {cfg_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"{cfg_path} must contain a mapping of settings.")
    return from_dict(data)
