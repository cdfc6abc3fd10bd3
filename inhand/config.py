"""
config.py — in-hand calculator settings.

Usage:
    from inhand.config import settings
    print(settings.default_assessment_year)

Values load from environment variables prefixed INHAND_ (or a .env file),
e.g. INHAND_DEFAULT_PF_PERCENTAGE=10.
"""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="INHAND_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Silently ignore any extra env vars
    )

    # --- Tax year defaults ---
    default_assessment_year: str = "2026-27"
    default_regime: str = "new"

    # --- PF defaults ---
    # Percentage of CTC (employer) and of gross-after-employer-PF (employee)
    default_pf_percentage: float = Field(default=12.0, ge=0)

    # --- Salary comparison ---
    max_salary_variations: int = Field(default=5, ge=1)


# Module-level singleton, import this throughout the codebase
settings = Settings()
