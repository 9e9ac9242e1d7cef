"""Application configuration using pydantic-settings."""

import os
import sys
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .engine.enums import Action, parse_playable_action
from .engine.types import CombatConfig

APP_NAME = "TriadDuel"


def default_data_dir() -> Path:
    """Platform-appropriate writable application data directory."""
    if sys.platform == "win32":
        base = os.environ.get("APPDATA")
        return Path(base) / APP_NAME if base else Path.home() / "AppData" / "Roaming" / APP_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME
    base = os.environ.get("XDG_DATA_HOME")
    return (Path(base) if base else Path.home() / ".local" / "share") / "triad_duel"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    debug: bool = False

    # Combat tuning (validated by CombatConfig)
    max_health: int = 10
    qte_duration: float = 0.5  # Seconds the player has to react
    time_dilation_factor: float = 0.3  # Simulation speed during the reaction window
    impact_delay: float = 0.4
    recovery_delay: float = 0.6

    # Combat log
    data_dir: str | None = None  # Defaults to the platform app data directory
    combat_log_file: str = "CombatData.csv"

    # Enemy AI
    enemy_attack_actions: str = "light,heavy"  # Comma-separated actions the AI may open with
    enemy_attack_cooldown_min: float = 2.0
    enemy_attack_cooldown_max: float = 4.0
    enemy_policy: str = Field(default="random", pattern="^(random|counter)$")

    # Headless simulation
    headless: bool = True  # Skip real waits
    simulation_turns: int = 50
    player_reaction_rate: float = Field(default=0.7, ge=0.0, le=1.0)
    random_seed: int | None = None

    def get_enemy_attack_actions(self) -> list[Action]:
        """Parse enemy attack actions from comma-separated string."""
        return [parse_playable_action(name) for name in self.enemy_attack_actions.split(",") if name.strip()]

    def get_data_dir(self) -> Path:
        """Directory holding the combat log."""
        return Path(self.data_dir) if self.data_dir else default_data_dir()

    def get_combat_log_path(self) -> Path:
        """Full path of the combat log."""
        return self.get_data_dir() / self.combat_log_file

    def combat_config(self) -> CombatConfig:
        """Build the engine configuration.

        Raises:
            ConfigurationError: If any combat value is out of range
        """
        return CombatConfig(
            max_health=self.max_health,
            qte_duration=self.qte_duration,
            time_dilation_factor=self.time_dilation_factor,
            impact_delay=self.impact_delay,
            recovery_delay=self.recovery_delay,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
