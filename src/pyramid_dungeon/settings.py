from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml

from .errors import SettingsError

logger = logging.getLogger(__name__)

DEFAULT_RESOURCE = "default_topology.yaml"
SETTINGS_FILE_ENV = "PYRAMID_SETTINGS_FILE"


def _default_profiles() -> List[Tuple[int, int]]:
    return [(5, 50), (8, 30)]


def _optional_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, str) and value.strip().lower() in {"", "none", "random"}:
        return None
    return int(value)


@dataclass
class TopologySettings:
    """Generation parameters for one dungeon.

    Loaded from the packaged defaults, then a user YAML file, then
    environment variables (prefix: PYRAMID_), then explicit overrides.
    ``seed=None`` means a fresh random seed per generation.
    """

    seed: Optional[int] = None
    grid_side_length: int = 10
    # 100x100 interior plus one tile of outline
    room_cell_size: int = 101
    border_padding: int = 150
    boss_room_padding: int = 150
    decoy_depth: int = 2
    branch_profiles: List[Tuple[int, int]] = field(default_factory=_default_profiles)

    # ------------------------ Core API ------------------------
    def validate(self) -> None:
        """Validate and normalize settings; raises SettingsError on bad values."""
        try:
            self.seed = _optional_int(self.seed)
            self.grid_side_length = int(self.grid_side_length)
            self.room_cell_size = int(self.room_cell_size)
            self.border_padding = int(self.border_padding)
            self.boss_room_padding = int(self.boss_room_padding)
            self.decoy_depth = int(self.decoy_depth)
            self.branch_profiles = [self._coerce_profile(p) for p in self.branch_profiles]
        except (TypeError, ValueError) as exc:
            raise SettingsError(f"Invalid topology settings: {exc}") from exc
        except KeyError as exc:
            raise SettingsError(f"Branch profile is missing {exc}") from exc

        if self.grid_side_length <= 0:
            raise SettingsError(f"grid_side_length must be positive, got {self.grid_side_length}")
        if self.room_cell_size <= 0:
            raise SettingsError(f"room_cell_size must be positive, got {self.room_cell_size}")
        if self.border_padding < 0 or self.boss_room_padding < 0:
            raise SettingsError("Paddings cannot be negative")
        if self.decoy_depth < 0:
            raise SettingsError(f"decoy_depth cannot be negative, got {self.decoy_depth}")
        if self.decoy_depth > 0 and not self.branch_profiles:
            raise SettingsError("branch_profiles must not be empty when decoy_depth > 0")
        for chance, end in self.branch_profiles:
            if chance < 1 or end < 1:
                raise SettingsError(f"Branch denominators must be >= 1, got {chance}/{end}")

    @staticmethod
    def _coerce_profile(raw: Any) -> Tuple[int, int]:
        if isinstance(raw, Mapping):
            return int(raw["branch_chance"]), int(raw["branch_end"])
        chance, end = raw
        return int(chance), int(end)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "grid_side_length": self.grid_side_length,
            "room_cell_size": self.room_cell_size,
            "border_padding": self.border_padding,
            "boss_room_padding": self.boss_room_padding,
            "decoy_depth": self.decoy_depth,
            "branch_profiles": [{"branch_chance": c, "branch_end": e} for c, e in self.branch_profiles],
        }

    # ------------------------ Loading & Overrides ------------------------
    @staticmethod
    def _load_yaml(path: Path) -> dict:
        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise SettingsError(f"Invalid YAML in {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise SettingsError(f"Settings file {path} must contain a mapping")
        return data

    @classmethod
    def _deep_merge(cls, base: dict, overlay: dict) -> dict:
        merged = dict(base)
        for k, v in (overlay or {}).items():
            if isinstance(v, dict) and isinstance(base.get(k), dict):
                merged[k] = cls._deep_merge(base[k], v)
            else:
                merged[k] = v
        return merged

    @classmethod
    def _load_defaults(cls) -> dict:
        try:
            with resources.files("pyramid_dungeon.config").joinpath(DEFAULT_RESOURCE).open(
                "r", encoding="utf-8"
            ) as f:
                return yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.warning("Default topology settings not found; falling back to dataclass defaults.")
            return cls().as_dict()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TopologySettings":
        allowed = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - allowed)
        if unknown:
            logger.warning("Ignoring unknown topology settings: %s", ", ".join(unknown))
        filtered = {k: v for k, v in data.items() if k in allowed}
        obj = cls(**filtered)
        obj.validate()
        return obj

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        env = os.environ if env is None else env
        mapping = {
            "PYRAMID_SEED": ("seed", _optional_int),
            "PYRAMID_GRID_SIDE": ("grid_side_length", int),
            "PYRAMID_ROOM_CELL_SIZE": ("room_cell_size", int),
            "PYRAMID_BORDER_PADDING": ("border_padding", int),
            "PYRAMID_BOSS_ROOM_PADDING": ("boss_room_padding", int),
            "PYRAMID_DECOY_DEPTH": ("decoy_depth", int),
        }
        out: Dict[str, Any] = {}
        for env_key, (field_name, caster) in mapping.items():
            if env_key in env and env[env_key] != "":
                try:
                    out[field_name] = caster(env[env_key])
                except ValueError as exc:
                    logger.warning("Ignoring invalid env %s=%r: %s", env_key, env[env_key], exc)
        return out

    @classmethod
    def load(
        cls,
        user_path: Optional[Path | str] = None,
        *,
        env: Optional[Mapping[str, str]] = None,
        **overrides: Any,
    ) -> "TopologySettings":
        """Load settings; precedence (lowest to highest): defaults < file < env < overrides.

        When user_path is None the PYRAMID_SETTINGS_FILE variable is consulted.
        A missing user file is logged and skipped.
        """
        env_map = os.environ if env is None else env
        data = cls._load_defaults()

        if user_path is None and env_map.get(SETTINGS_FILE_ENV):
            user_path = env_map[SETTINGS_FILE_ENV]
        if user_path is not None:
            path = Path(user_path).expanduser()
            if path.exists():
                data = cls._deep_merge(data, cls._load_yaml(path))
                logger.info("Loaded topology settings from %s", path)
            else:
                logger.warning("Topology settings file not found: %s", path)

        data.update(cls.from_env(env_map))
        data.update({k: v for k, v in overrides.items() if v is not None})
        settings = cls.from_dict(data)
        logger.debug("Topology settings merged: %s", settings)
        return settings

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(self.as_dict(), f, sort_keys=False)
        logger.info("Saved topology settings to %s", path)
