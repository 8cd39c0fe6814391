"""Configuration management with environment variable support."""

import logging
import os
from dataclasses import dataclass, field


def _parse_seed() -> int | None:
    """Parse DOS_SEED; unset or empty means an unseeded shuffle."""
    seed = os.getenv("DOS_SEED", "").strip()
    return int(seed) if seed else None


@dataclass(frozen=True)
class GameConfig:
    """Engine configuration. Table rules themselves are fixed constants."""

    seed: int | None = field(default_factory=_parse_seed)
    check_invariants: bool = field(
        default_factory=lambda: os.getenv("DOS_CHECK_INVARIANTS", "true").lower() == "true"
    )


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "").upper())

    game: GameConfig = field(default_factory=GameConfig)

    @property
    def effective_log_level(self) -> str:
        """LOG_LEVEL if set, otherwise DEBUG in debug mode and INFO elsewhere."""
        if self.log_level:
            return self.log_level
        return "DEBUG" if self.debug else "INFO"


def configure_logging(app_config: AppConfig | None = None) -> None:
    """Configure root logging for an application embedding the engine."""
    app_config = app_config or config
    logging.basicConfig(
        level=app_config.effective_log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Global configuration instance
config = AppConfig()
