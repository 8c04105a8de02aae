"""Mapping between geographic coordinates and points on the globe model."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, List, Tuple

import math

from .physics_engine import DomainError

# Aligns longitude 0 with the prime meridian of the globe texture.
TEXTURE_LONGITUDE_OFFSET_DEG = 270.0
DEFAULT_GLOBE_RADIUS = 1.0
_POLE_TOLERANCE = 1e-12


@dataclass(frozen=True)
class GeoPoint:
    latitude_deg: float
    longitude_deg: float

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class SpacePoint:
    x: float
    y: float
    z: float

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


def _require_radius(radius: float) -> None:
    if not radius > 0:
        raise DomainError(f"radius must be positive, got {radius!r}")


def clamp_latitude(latitude_deg: float) -> float:
    return max(-90.0, min(90.0, latitude_deg))


def wrap_longitude(longitude_deg: float) -> float:
    """Wrap a longitude into the half-open range (-180, 180]."""

    wrapped = (longitude_deg + 180.0) % 360.0 - 180.0
    if wrapped == -180.0:
        return 180.0
    return wrapped


def to_space_point(latitude_deg: float, longitude_deg: float, radius: float = DEFAULT_GLOBE_RADIUS) -> SpacePoint:
    """Project a latitude/longitude onto a sphere with the y axis through the poles.

    Out-of-range input is clamped (latitude) or wrapped (longitude) rather
    than rejected.
    """

    _require_radius(radius)
    phi = math.radians(90.0 - clamp_latitude(latitude_deg))
    theta = math.radians(wrap_longitude(longitude_deg) - TEXTURE_LONGITUDE_OFFSET_DEG)

    return SpacePoint(
        x=radius * math.sin(phi) * math.sin(theta),
        y=radius * math.cos(phi),
        z=radius * math.sin(phi) * math.cos(theta),
    )


def to_geo_point(x: float, y: float, z: float, radius: float = DEFAULT_GLOBE_RADIUS) -> GeoPoint:
    """Inverse of :func:`to_space_point`.

    Points on the polar axis have no defined longitude; ``0.0`` is returned.
    """

    _require_radius(radius)
    latitude_deg = math.degrees(math.asin(max(-1.0, min(1.0, y / radius))))

    if math.hypot(x, z) <= _POLE_TOLERANCE * radius:
        return GeoPoint(latitude_deg=latitude_deg, longitude_deg=0.0)

    longitude_deg = wrap_longitude(math.degrees(math.atan2(x, z)) + TEXTURE_LONGITUDE_OFFSET_DEG)
    return GeoPoint(latitude_deg=latitude_deg, longitude_deg=longitude_deg)


# -----------------------------------------------------------------------------
# Region lookup
# -----------------------------------------------------------------------------
# (name, (lat_min, lat_max), (lon_min, lon_max)); first match wins.
_REGION_BOUNDS: List[Tuple[str, Tuple[float, float], Tuple[float, float]]] = [
    ("North America", (15.0, 72.0), (-170.0, -50.0)),
    ("South America", (-56.0, 15.0), (-82.0, -34.0)),
    ("Europe", (36.0, 71.0), (-10.0, 40.0)),
    ("Africa", (-35.0, 37.0), (-18.0, 52.0)),
    ("Middle East", (-10.0, 77.0), (26.0, 63.0)),
    ("Asia", (-10.0, 77.0), (40.0, 180.0)),
    ("Oceania", (-47.0, 0.0), (110.0, 180.0)),
]


def continent_for(latitude_deg: float, longitude_deg: float) -> str:
    """Approximate region name for a coordinate using coarse bounding boxes."""

    for name, (lat_min, lat_max), (lon_min, lon_max) in _REGION_BOUNDS:
        if lat_min <= latitude_deg <= lat_max and lon_min <= longitude_deg <= lon_max:
            return name

    # Pacific basin spans the antimeridian.
    if -30.0 <= latitude_deg <= 30.0 and (longitude_deg >= 130.0 or longitude_deg <= -120.0):
        return "Pacific Ocean"
    if latitude_deg < -60.0:
        return "Antarctica"
    if latitude_deg > 66.5:
        return "Arctic"
    if -60.0 <= latitude_deg <= 60.0 and -60.0 <= longitude_deg <= 0.0:
        return "Atlantic Ocean"
    if -60.0 <= latitude_deg <= 30.0 and 20.0 <= longitude_deg <= 110.0:
        return "Indian Ocean"
    return "Unknown Location"


def describe_location(latitude_deg: float, longitude_deg: float) -> str:
    lat_dir = "N" if latitude_deg >= 0 else "S"
    lon_dir = "E" if longitude_deg >= 0 else "W"
    return (
        f"{continent_for(latitude_deg, longitude_deg)} "
        f"({abs(latitude_deg):.1f}°{lat_dir}, {abs(longitude_deg):.1f}°{lon_dir})"
    )
