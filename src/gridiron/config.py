"""Application settings via pydantic-settings. Loads from environment and .env file."""

from __future__ import annotations

from pydantic import model_validator
from pydantic_settings import BaseSettings

# League shape enforced by the export tooling. The validator only reports against these.
DEFAULT_DIVISION_SIZE = 4
DEFAULT_LEAGUE_SIZE = 32

# Discord caps autocomplete responses at 25 choices.
MAX_AUTOCOMPLETE_CHOICES = 25


class Settings(BaseSettings):
    """Gridiron expansion overlay configuration.

    All values can be overridden via environment variables or .env file.
    """

    # Environment
    gridiron_env: str = "development"

    # Logging
    gridiron_log_level: str = "INFO"

    # Catalog override (YAML). Empty means the built-in 31-team catalog.
    gridiron_catalog_path: str = ""

    # League structure
    gridiron_division_size: int = DEFAULT_DIVISION_SIZE
    gridiron_league_size: int = DEFAULT_LEAGUE_SIZE

    # Presentation
    gridiron_autocomplete_limit: int = MAX_AUTOCOMPLETE_CHOICES
    gridiron_season_base_year: int = 2024
    gridiron_wait_ping_hours: int = 12

    # Discord
    discord_admin_role_id: str = ""

    model_config = {"env_prefix": "", "env_file": ".env", "extra": "ignore"}

    @model_validator(mode="after")
    def _check_league_shape(self) -> Settings:
        """A league must split evenly into divisions."""
        if self.gridiron_division_size < 1:
            raise ValueError("GRIDIRON_DIVISION_SIZE must be positive")
        if self.gridiron_league_size < 1:
            raise ValueError("GRIDIRON_LEAGUE_SIZE must be positive")
        if self.gridiron_league_size % self.gridiron_division_size != 0:
            msg = (
                f"GRIDIRON_LEAGUE_SIZE ({self.gridiron_league_size}) is not divisible by "
                f"GRIDIRON_DIVISION_SIZE ({self.gridiron_division_size})"
            )
            raise ValueError(msg)
        return self

    @model_validator(mode="after")
    def _clamp_autocomplete_limit(self) -> Settings:
        """Reject non-positive limits; clamp anything above Discord's cap."""
        if self.gridiron_autocomplete_limit < 1:
            raise ValueError("GRIDIRON_AUTOCOMPLETE_LIMIT must be positive")
        if self.gridiron_autocomplete_limit > MAX_AUTOCOMPLETE_CHOICES:
            self.gridiron_autocomplete_limit = MAX_AUTOCOMPLETE_CHOICES
        return self

    @property
    def division_count(self) -> int:
        """Number of divisions a healthy league has."""
        return self.gridiron_league_size // self.gridiron_division_size
