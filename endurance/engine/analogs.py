"""Historical analog lookup for computed impact scenarios.

Candidates are ranked by a weighted normalised distance. Selection then
runs in two passes: a decisive best match is returned directly, otherwise a
small window of runners-up is searched for a comparable record from a
different energy decade (or magnitude band) so that the same few near
duplicates are not cited every time.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, List, Optional, Sequence, TypeVar

import logging
import math

from .physics_engine import ImpactMetrics
from .reference_data import HistoricalEarthquake, HistoricalImpact, get_reference_catalog

logger = logging.getLogger(__name__)

IMPACT_ENERGY_WEIGHT = 0.7
IMPACT_CRATER_WEIGHT = 0.3
IMPACT_DECISIVE_SCORE = 0.1
IMPACT_DIVERSITY_WINDOW = 5
IMPACT_DIVERSITY_MAX_SCORE = 0.5

EARTHQUAKE_MAGNITUDE_WEIGHT = 0.6
EARTHQUAKE_ENERGY_WEIGHT = 0.4
EARTHQUAKE_DECISIVE_SCORE = 0.15
EARTHQUAKE_DIVERSITY_WINDOW = 8
EARTHQUAKE_DIVERSITY_MAX_SCORE = 0.4
NOTABLE_CASUALTIES = 100
NOTABLE_MAGNITUDE = 7.5

RecordT = TypeVar("RecordT")


@dataclass(frozen=True)
class RankedMatch(Generic[RecordT]):
    record: RecordT
    score: float


def normalised_difference(a: float, b: float) -> float:
    """Relative difference in [0, 1] for non-negative quantities."""

    if a == b:
        return 0.0
    return abs(a - b) / max(abs(a), abs(b))


def energy_decade(energy_megatons: float) -> Optional[int]:
    if energy_megatons <= 0:
        return None
    return math.floor(math.log10(energy_megatons))


def magnitude_band(magnitude: float) -> int:
    return math.floor(magnitude)


def score_impact(metrics: ImpactMetrics, record: HistoricalImpact) -> float:
    return (
        IMPACT_ENERGY_WEIGHT * normalised_difference(metrics.tnt_megatons, record.energy_megatons)
        + IMPACT_CRATER_WEIGHT * normalised_difference(metrics.crater_diameter_km, record.crater_km)
    )


def score_earthquake(metrics: ImpactMetrics, record: HistoricalEarthquake) -> float:
    return (
        EARTHQUAKE_MAGNITUDE_WEIGHT * normalised_difference(metrics.seismic_equivalent_magnitude, record.magnitude)
        + EARTHQUAKE_ENERGY_WEIGHT * normalised_difference(metrics.tnt_megatons, record.energy_megatons)
    )


def rank_impacts(metrics: ImpactMetrics, catalog: Sequence[HistoricalImpact]) -> List[RankedMatch[HistoricalImpact]]:
    ranked = [RankedMatch(record, score_impact(metrics, record)) for record in catalog]
    ranked.sort(key=lambda match: match.score)
    return ranked


def rank_earthquakes(
    metrics: ImpactMetrics, catalog: Sequence[HistoricalEarthquake]
) -> List[RankedMatch[HistoricalEarthquake]]:
    ranked = [RankedMatch(record, score_earthquake(metrics, record)) for record in catalog]
    ranked.sort(key=lambda match: match.score)
    return ranked


def select_diverse_match(
    ranked: Sequence[RankedMatch[RecordT]],
    band: Callable[[RecordT], object],
    *,
    decisive_score: float,
    window: int,
    max_score: float,
) -> Optional[RankedMatch[RecordT]]:
    """Pick from an ascending ranking, preferring variety when the best is not decisive."""

    if not ranked:
        return None

    best = ranked[0]
    if best.score < decisive_score:
        return best

    best_band = band(best.record)
    for candidate in ranked[1 : 1 + window]:
        if candidate.score < max_score and band(candidate.record) != best_band:
            return candidate
    return best


def find_closest_impact(
    metrics: ImpactMetrics,
    catalog: Optional[Sequence[HistoricalImpact]] = None,
) -> Optional[HistoricalImpact]:
    """Most comparable historical impact, or ``None`` for an empty catalog."""

    if catalog is None:
        catalog = get_reference_catalog().impacts

    match = select_diverse_match(
        rank_impacts(metrics, catalog),
        lambda record: energy_decade(record.energy_megatons),
        decisive_score=IMPACT_DECISIVE_SCORE,
        window=IMPACT_DIVERSITY_WINDOW,
        max_score=IMPACT_DIVERSITY_MAX_SCORE,
    )
    if match is None:
        logger.debug("No impact analog: empty catalog")
        return None
    logger.debug("Impact analog %s (score %.3f)", match.record.name, match.score)
    return match.record


def _is_notable(record: HistoricalEarthquake) -> bool:
    return (record.casualties or 0) > NOTABLE_CASUALTIES or record.magnitude >= NOTABLE_MAGNITUDE


def find_closest_earthquake(
    metrics: ImpactMetrics,
    catalog: Optional[Sequence[HistoricalEarthquake]] = None,
) -> Optional[HistoricalEarthquake]:
    """Most comparable notable earthquake, or ``None`` for an empty catalog."""

    if catalog is None:
        catalog = get_reference_catalog().earthquakes

    notable = [record for record in catalog if _is_notable(record)]
    ranked = rank_earthquakes(metrics, notable or catalog)

    match = select_diverse_match(
        ranked,
        lambda record: magnitude_band(record.magnitude),
        decisive_score=EARTHQUAKE_DECISIVE_SCORE,
        window=EARTHQUAKE_DIVERSITY_WINDOW,
        max_score=EARTHQUAKE_DIVERSITY_MAX_SCORE,
    )
    if match is None:
        logger.debug("No earthquake analog: empty catalog")
        return None
    logger.debug("Earthquake analog %s (score %.3f)", match.record.name, match.score)
    return match.record
