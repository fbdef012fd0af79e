from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from platformdirs import user_config_dir
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .errors import ConfigError

logger = logging.getLogger(__name__)

APP_NAME = "sigdungeon"
CONFIG_ENV_VAR = "SIGDUNGEON_CONFIG"
CONFIG_FILENAME = "config.yaml"


class _Section(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class PlayerConfig(_Section):
    base_health: float = Field(100.0, gt=0, description="Max health before equipment")
    base_attack: float = Field(10.0, ge=0, description="Attack before equipment")
    base_defense: float = Field(5.0, ge=0, description="Defense before equipment")
    base_speed: float = Field(10.0, ge=0, description="Speed before equipment")


class CombatConfig(_Section):
    player_recovery_percent: float = Field(0.15, ge=0, le=1, description="Heal between simulator fights")
    exploration_recovery_percent: float = Field(0.05, ge=0, le=1, description="Heal after each explorer move")
    affinity_attack_bonus: float = Field(0.5, ge=0)
    affinity_defense_bonus: float = Field(0.3, ge=0)
    affinity_speed_bonus: float = Field(0.2, ge=0)
    affinity_scale_factor: float = Field(1.0, ge=0, description="Weight applied to each item's similarity")
    player_speed_advantage_factor: float = Field(0.5, ge=0)
    enemy_defense_factor: float = Field(0.2, ge=0)
    player_defense_factor: float = Field(0.5, ge=0)
    low_health_threshold: float = Field(0.3, ge=0, le=1)
    max_combat_rounds: int = Field(20, ge=1)
    player_damage_variance: float = Field(0.2, ge=0, lt=1, description="Player hits roll 1 +/- this")
    enemy_damage_variance: float = Field(0.1, ge=0, lt=1, description="Enemy hits roll 1 +/- this")


class DungeonConfig(_Section):
    width: int = Field(20, ge=3, description="Grid width; the forced path needs an interior column")
    height: int = Field(15, ge=1)
    max_exploration_steps: int = Field(100, ge=1)
    min_difficulty: int = Field(1, ge=1)
    max_difficulty: int = Field(3, ge=1)
    min_length: int = Field(3, ge=0, description="Nominal duration in minutes")
    max_length: int = Field(5, ge=0)
    signature_variance: float = Field(0.2, ge=0, description="Dungeon signature spread around the seed item")
    tile_noise_scale: float = Field(0.4, ge=0)
    path_drift_chance: float = Field(0.4, ge=0, le=1)
    base_enemy_count: int = Field(3, ge=0)
    enemies_per_difficulty: int = Field(2, ge=0)
    enemy_signature_variance: float = Field(0.3, ge=0)
    enemy_loot_chance: float = Field(0.5, ge=0, le=1)
    enemy_min_scale: float = Field(0.8, ge=0, description="Enemy stat multiplier at the far end of the scale")
    enemy_scale_range: float = Field(0.4, ge=0, description="Extra multiplier for an exact theme match")
    enemy_scale_distance: float = Field(4.0, gt=0, description="Signature distance at which the extra multiplier is gone")

    @model_validator(mode="after")
    def _check_ranges(self) -> "DungeonConfig":
        if self.min_difficulty > self.max_difficulty:
            raise ValueError("min_difficulty must not exceed max_difficulty")
        if self.min_length > self.max_length:
            raise ValueError("min_length must not exceed max_length")
        return self


class SignatureConfig(_Section):
    high_threshold: float = Field(0.5, ge=-1, le=1)
    low_threshold: float = Field(-0.5, ge=-1, le=1)
    default_variance: float = Field(0.2, ge=0)

    @model_validator(mode="after")
    def _check_thresholds(self) -> "SignatureConfig":
        if self.low_threshold >= self.high_threshold:
            raise ValueError("low_threshold must be below high_threshold")
        return self


class LootConfig(_Section):
    min_loot_count: int = Field(1, ge=0)
    max_loot_count: int = Field(3, ge=0, description="Inclusive upper bound before the clean run bonus")
    clean_run_bonus: int = Field(2, ge=0, description="Extra items when a run ends without casualties")
    legendary_prefix: str = "Legendary"
    base_attack_share: float = Field(0.6, ge=0, description="Share of item power granted as attack")
    base_defense_share: float = Field(0.4, ge=0, description="Share of item power granted as defense")
    hot_attack_share: float = Field(0.2, ge=0)
    cold_defense_share: float = Field(0.2, ge=0)
    hard_defense_share: float = Field(0.3, ge=0)
    soft_speed_share: float = Field(0.3, ge=0)

    @model_validator(mode="after")
    def _check_counts(self) -> "LootConfig":
        if self.min_loot_count > self.max_loot_count:
            raise ValueError("min_loot_count must not exceed max_loot_count")
        return self


class InventoryConfig(_Section):
    capacity: int = Field(20, ge=1)
    dungeon_slots: int = Field(3, ge=1)
    unlocked_dungeon_slots: int = Field(1, ge=0)
    starter_items: int = Field(3, ge=0)

    @model_validator(mode="after")
    def _check_slots(self) -> "InventoryConfig":
        if self.unlocked_dungeon_slots > self.dungeon_slots:
            raise ValueError("unlocked_dungeon_slots must not exceed dungeon_slots")
        return self


class GameConfig(_Section):
    """
    Tunable constants for generation and combat.

    Defaults live on the fields; a YAML file only needs the keys it changes:

        combat:
          max_combat_rounds: 30
        dungeon:
          width: 32
    """

    player: PlayerConfig = Field(default_factory=PlayerConfig)
    combat: CombatConfig = Field(default_factory=CombatConfig)
    dungeon: DungeonConfig = Field(default_factory=DungeonConfig)
    signature: SignatureConfig = Field(default_factory=SignatureConfig)
    loot: LootConfig = Field(default_factory=LootConfig)
    inventory: InventoryConfig = Field(default_factory=InventoryConfig)

    @staticmethod
    def default_path() -> Path:
        return Path(user_config_dir(appname=APP_NAME)) / CONFIG_FILENAME

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
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "GameConfig":
        """Overlay a (possibly partial) mapping onto the defaults and validate it."""
        if data is not None and not isinstance(data, dict):
            raise ConfigError(f"Config root must be a mapping, got {type(data).__name__}")
        merged = cls._deep_merge(cls().model_dump(), data or {})
        try:
            return cls.model_validate(merged)
        except ValidationError as e:
            raise ConfigError(f"Invalid game config: {e}") from e

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None) -> "GameConfig":
        """Load configuration, falling back to defaults when no file is found.

        Lookup order when ``path`` is None: the SIGDUNGEON_CONFIG env var, then
        config.yaml in the per-user config directory.
        """
        explicit = path is not None
        if path is None:
            env_path = os.environ.get(CONFIG_ENV_VAR)
            if env_path:
                path = Path(env_path)
                explicit = True
            else:
                path = cls.default_path()
        path = Path(path)

        if not path.exists():
            if explicit:
                raise ConfigError(f"Config file not found: {path}")
            logger.debug("No config at %s; using defaults", path)
            return cls()

        try:
            with path.open("r", encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Malformed YAML in {path}: {e}") from e
        cfg = cls.from_dict(raw)
        logger.info("Loaded game config from %s", path)
        return cfg

    def save(self, path: Union[str, Path]) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(self.model_dump(), f, sort_keys=True)
        logger.info("Saved game config to %s", path)


__all__ = [
    "GameConfig",
    "PlayerConfig",
    "CombatConfig",
    "DungeonConfig",
    "SignatureConfig",
    "LootConfig",
    "InventoryConfig",
]
