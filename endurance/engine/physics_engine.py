"""Impact physics powering the Endurance scenario engine.

All formulas are simplified empirical estimates intended for demonstration,
not rigorous impact modelling.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Optional

import logging
import math

from scipy import constants

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Shared constants
# -----------------------------------------------------------------------------
ASTEROID_DENSITY_KG_M3 = 3000.0
MEGATON_TNT_JOULES = constants.ton_TNT * constants.mega  # 4.184e15 J
CRATER_COEFFICIENT = 1.8
CRATER_DIAMETER_EXPONENT = 0.78
CRATER_DENSITY_EXPONENT = 0.33
DESTRUCTION_RADIUS_FACTOR = 1.5
CASUALTY_RATE = 0.5


class DomainError(ValueError):
    """Raised when an input violates a documented precondition."""


@dataclass(frozen=True)
class AsteroidParameters:
    """Physical parameters of an incoming asteroid."""

    diameter_m: float
    velocity_kms: float
    density_kg_m3: float = ASTEROID_DENSITY_KG_M3

    def __post_init__(self) -> None:
        _require_positive("diameter_m", self.diameter_m)
        _require_positive("velocity_kms", self.velocity_kms)
        _require_positive("density_kg_m3", self.density_kg_m3)

    @property
    def mass_kg(self) -> float:
        return calculate_mass(self.diameter_m, self.density_kg_m3)

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class ImpactMetrics:
    kinetic_energy_joules: float
    tnt_megatons: float
    crater_diameter_km: float
    destruction_radius_km: float
    approx_casualties: Optional[int]
    seismic_equivalent_magnitude: float

    def as_dict(self) -> Dict[str, object]:
        return asdict(self)


# -----------------------------------------------------------------------------
# Utility helpers
# -----------------------------------------------------------------------------
def _require_positive(name: str, value: float) -> None:
    # NaN fails the comparison too.
    if not value > 0:
        raise DomainError(f"{name} must be positive, got {value!r}")


def calculate_mass(
    diameter_m: float,
    density_kg_m3: float = ASTEROID_DENSITY_KG_M3,
) -> float:
    """Mass of a uniform sphere of the given diameter and density."""

    radius_m = diameter_m / 2.0
    volume_m3 = (4.0 / 3.0) * math.pi * radius_m**3
    return volume_m3 * density_kg_m3


# -----------------------------------------------------------------------------
# Public API
# -----------------------------------------------------------------------------
def calculate_kinetic_energy(
    diameter_m: float,
    velocity_kms: float,
    density_kg_m3: float = ASTEROID_DENSITY_KG_M3,
) -> Dict[str, float]:
    """Return kinetic energy metrics in Joules and TNT megatons."""

    mass_kg = calculate_mass(diameter_m, density_kg_m3)
    velocity_ms = velocity_kms * constants.kilo
    energy_joules = 0.5 * mass_kg * velocity_ms**2

    return {
        "mass_kg": mass_kg,
        "velocity_ms": velocity_ms,
        "energy_joules": energy_joules,
        "energy_mt": energy_joules / MEGATON_TNT_JOULES,
    }


def calculate_crater_diameter(
    diameter_m: float,
    density_kg_m3: float = ASTEROID_DENSITY_KG_M3,
) -> float:
    """Estimate final crater diameter in kilometres.

    Empirical scaling on impactor size and density relative to stony
    asteroids. The units do not balance; the result is a demonstrative
    estimate only.
    """

    return (
        CRATER_COEFFICIENT
        * (diameter_m / 1000.0) ** CRATER_DIAMETER_EXPONENT
        * (density_kg_m3 / ASTEROID_DENSITY_KG_M3) ** CRATER_DENSITY_EXPONENT
    )


def calculate_seismic_magnitude(energy_joules: float) -> float:
    """Approximate Richter-equivalent magnitude from impact energy."""

    return (2.0 / 3.0) * math.log10(energy_joules) - 2.9


def estimate_casualties(destruction_radius_km: float, target_population: int) -> int:
    """Population share inside the heavy-damage zone times a flat casualty rate."""

    destruction_area_km2 = math.pi * destruction_radius_km**2
    return math.floor(target_population * destruction_area_km2 / 100.0 * CASUALTY_RATE)


def compute_impact_metrics(
    diameter_m: float,
    velocity_kms: float,
    density_kg_m3: float = ASTEROID_DENSITY_KG_M3,
    target_population: Optional[int] = None,
) -> ImpactMetrics:
    """Convert asteroid parameters into impact consequence estimates.

    ``approx_casualties`` is ``None`` when no target population is given,
    meaning unknown rather than zero.

    Raises:
        DomainError: diameter, velocity or density is not positive.
    """

    _require_positive("diameter_m", diameter_m)
    _require_positive("velocity_kms", velocity_kms)
    _require_positive("density_kg_m3", density_kg_m3)

    energy = calculate_kinetic_energy(diameter_m, velocity_kms, density_kg_m3)
    crater_diameter_km = calculate_crater_diameter(diameter_m, density_kg_m3)
    destruction_radius_km = crater_diameter_km * DESTRUCTION_RADIUS_FACTOR

    approx_casualties = None
    if target_population is not None:
        approx_casualties = estimate_casualties(destruction_radius_km, target_population)

    metrics = ImpactMetrics(
        kinetic_energy_joules=round(energy["energy_joules"], 2),
        tnt_megatons=round(energy["energy_mt"], 2),
        crater_diameter_km=round(crater_diameter_km, 2),
        destruction_radius_km=round(destruction_radius_km, 2),
        approx_casualties=approx_casualties,
        seismic_equivalent_magnitude=round(calculate_seismic_magnitude(energy["energy_joules"]), 1),
    )
    logger.debug(
        "Impact metrics for d=%.1fm v=%.2fkm/s rho=%.0f: %s",
        diameter_m,
        velocity_kms,
        density_kg_m3,
        metrics,
    )
    return metrics
