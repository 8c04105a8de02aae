"""Kinetic-impactor deflection model.

Momentum from the interceptor, amplified by ejecta recoil, shifts the
asteroid's velocity; the shift is assumed to accumulate linearly over the
warning window. No orbital mechanics are involved.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Tuple

import logging
import math

from scipy import constants

from .physics_engine import ASTEROID_DENSITY_KG_M3, DomainError, AsteroidParameters

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0
SAFETY_BUFFER_KM = 10_000.0
SAFETY_MARGIN_KM = EARTH_RADIUS_KM + SAFETY_BUFFER_KM

# DART (2022) reference values
DEFAULT_INTERCEPTOR_MASS_KG = 570.0
DEFAULT_INTERCEPTOR_VELOCITY_KMS = 6.6
DEFAULT_MOMENTUM_ENHANCEMENT = 3.6
DEFAULT_LEAD_TIME_YEARS = 5.0

LARGE_DIAMETER_M = 1000.0
MEDIUM_DIAMETER_M = 500.0
SMALL_DIAMETER_M = 100.0
MEDIUM_MIN_LEAD_TIME_YEARS = 10.0
SMALL_MIN_LEAD_TIME_YEARS = 2.0

REASON_TOO_LARGE = "Too large for a single kinetic-impactor mission"
REASON_LARGE_DEFLECTED = "Deflected: long lead time moved a large asteroid clear of Earth"
REASON_LARGE_INSUFFICIENT = "Insufficient: a large asteroid needs at least 10 years of warning and a wider miss"
REASON_MEDIUM_DEFLECTED = "Deflected: miss distance clears the safety margin"
REASON_MEDIUM_SHORT_WARNING = "Insufficient: warning time too short to accumulate a safe miss"
REASON_MEDIUM_MARGINAL = "Marginal success: deflection expected but below the safety margin"
REASON_SMALL_DEFLECTED = "Deflected: small asteroid pushed well clear of Earth"
REASON_SMALL_LIKELY = "Deflected: small asteroid, residual risk is minor"


@dataclass(frozen=True)
class DeflectionOutcome:
    success: bool
    velocity_change_ms: float
    deflection_distance_km: float
    miss_distance_km: float
    confidence_percent: int
    reason: str
    safety_margin_km: float
    deflection_angle_deg: float

    def as_dict(self) -> Dict[str, object]:
        return asdict(self)


def _classify(diameter_m: float, lead_time_years: float, miss_distance_km: float) -> Tuple[bool, int, str]:
    """Return ``(success, confidence, reason)`` for the diameter tier."""

    clears_margin = miss_distance_km > SAFETY_MARGIN_KM

    if diameter_m > LARGE_DIAMETER_M:
        return False, 5, REASON_TOO_LARGE

    if diameter_m > MEDIUM_DIAMETER_M:
        if lead_time_years >= MEDIUM_MIN_LEAD_TIME_YEARS and clears_margin:
            return True, 60, REASON_LARGE_DEFLECTED
        return False, 30, REASON_LARGE_INSUFFICIENT

    if diameter_m > SMALL_DIAMETER_M:
        if clears_margin:
            return True, 85, REASON_MEDIUM_DEFLECTED
        if lead_time_years < SMALL_MIN_LEAD_TIME_YEARS:
            return False, 40, REASON_MEDIUM_SHORT_WARNING
        # Success is reported here even though the margin was not cleared.
        return True, 70, REASON_MEDIUM_MARGINAL

    if miss_distance_km > 2 * SAFETY_MARGIN_KM:
        return True, 95, REASON_SMALL_DEFLECTED
    return True, 80, REASON_SMALL_LIKELY


def compute_deflection(
    velocity_kms: float,
    diameter_m: float,
    density_kg_m3: float = ASTEROID_DENSITY_KG_M3,
    lead_time_years: float = DEFAULT_LEAD_TIME_YEARS,
    interceptor_mass_kg: float = DEFAULT_INTERCEPTOR_MASS_KG,
    interceptor_velocity_kms: float = DEFAULT_INTERCEPTOR_VELOCITY_KMS,
    momentum_enhancement_factor: float = DEFAULT_MOMENTUM_ENHANCEMENT,
) -> DeflectionOutcome:
    """Estimate whether a kinetic impactor launched with the given warning succeeds.

    Raises:
        DomainError: asteroid parameters are not positive or the lead time
            is negative.
    """

    asteroid = AsteroidParameters(diameter_m, velocity_kms, density_kg_m3)
    if not lead_time_years >= 0:
        raise DomainError(f"lead_time_years must not be negative, got {lead_time_years!r}")

    momentum = momentum_enhancement_factor * interceptor_mass_kg * interceptor_velocity_kms * constants.kilo
    velocity_change_ms = momentum / asteroid.mass_kg

    lead_time_s = lead_time_years * constants.Julian_year
    deflection_distance_km = velocity_change_ms * lead_time_s / constants.kilo
    miss_distance_km = deflection_distance_km

    deflection_angle_deg = math.degrees(math.atan(velocity_change_ms / (velocity_kms * constants.kilo)))

    success, confidence, reason = _classify(diameter_m, lead_time_years, miss_distance_km)
    logger.debug(
        "Deflection d=%.1fm lead=%.1fy: dv=%.4gm/s miss=%.0fkm -> %s (%d%%)",
        diameter_m,
        lead_time_years,
        velocity_change_ms,
        miss_distance_km,
        reason,
        confidence,
    )

    return DeflectionOutcome(
        success=success,
        velocity_change_ms=velocity_change_ms,
        deflection_distance_km=deflection_distance_km,
        miss_distance_km=miss_distance_km,
        confidence_percent=confidence,
        reason=reason,
        safety_margin_km=SAFETY_MARGIN_KM,
        deflection_angle_deg=deflection_angle_deg,
    )
