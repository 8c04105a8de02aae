"""Runtime settings for the Endurance API.

Each field reads an `ENDURANCE_*` environment variable and falls back to the
DART reference mission and a New York default target.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import os

from dotenv import load_dotenv

# Variables already set in the process win over `.env` entries.
load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)


@dataclass(frozen=True)
class Settings:
    """Defaults for API requests that omit a parameter."""

    debug: bool = bool(int(os.getenv("ENDURANCE_DEBUG", "0")))
    default_latitude: float = float(os.getenv("ENDURANCE_DEFAULT_LAT", "40.7128"))
    default_longitude: float = float(os.getenv("ENDURANCE_DEFAULT_LON", "-74.006"))
    default_density_kg_m3: float = float(os.getenv("ENDURANCE_DEFAULT_DENSITY", "3000"))
    lead_time_years: float = float(os.getenv("ENDURANCE_LEAD_TIME_YEARS", "5"))
    interceptor_mass_kg: float = float(os.getenv("ENDURANCE_INTERCEPTOR_MASS_KG", "570"))
    interceptor_velocity_kms: float = float(os.getenv("ENDURANCE_INTERCEPTOR_VELOCITY_KMS", "6.6"))
    momentum_enhancement_factor: float = float(os.getenv("ENDURANCE_MOMENTUM_FACTOR", "3.6"))
    globe_radius: float = float(os.getenv("ENDURANCE_GLOBE_RADIUS", "1.0"))


def get_settings() -> Settings:
    """Read the current environment into a `Settings`."""

    return Settings()
