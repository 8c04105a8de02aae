"""Impact scenario engine for Endurance.

Pure, stateless calculations: impact metrics, kinetic-impactor deflection,
globe coordinate mapping and historical analog lookup.
"""
from __future__ import annotations

from .analogs import find_closest_earthquake, find_closest_impact
from .deflection import DeflectionOutcome, compute_deflection
from .geometry import GeoPoint, SpacePoint, describe_location, to_geo_point, to_space_point
from .physics_engine import (
    AsteroidParameters,
    DomainError,
    ImpactMetrics,
    compute_impact_metrics,
)
from .reference_data import (
    CityPreset,
    HistoricalEarthquake,
    HistoricalImpact,
    get_reference_catalog,
)
from .reporting import build_impact_summary, build_scenario_briefing

__all__ = [
    "AsteroidParameters",
    "ImpactMetrics",
    "DeflectionOutcome",
    "GeoPoint",
    "SpacePoint",
    "HistoricalImpact",
    "HistoricalEarthquake",
    "CityPreset",
    "DomainError",
    "compute_impact_metrics",
    "compute_deflection",
    "to_space_point",
    "to_geo_point",
    "describe_location",
    "find_closest_impact",
    "find_closest_earthquake",
    "get_reference_catalog",
    "build_impact_summary",
    "build_scenario_briefing",
]
