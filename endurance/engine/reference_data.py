"""Static reference datasets: historical impacts, earthquakes and target cities.

Values are rounded literature estimates, good enough to give a computed
scenario some historical context. Earthquake energies follow the
Gutenberg-Richter relation ``log10(E) = 1.5 M + 4.8`` (joules).
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from functools import lru_cache
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class HistoricalImpact:
    name: str
    energy_megatons: float
    crater_km: float  # 0 for airbursts
    year: int  # negative for years BCE
    casualties: Optional[int]
    description: str

    def as_dict(self) -> Dict[str, object]:
        return asdict(self)


@dataclass(frozen=True)
class HistoricalEarthquake:
    name: str
    magnitude: float
    energy_megatons: float
    year: int
    casualties: Optional[int]
    description: str

    def as_dict(self) -> Dict[str, object]:
        return asdict(self)


@dataclass(frozen=True)
class CityPreset:
    name: str
    latitude_deg: float
    longitude_deg: float
    population: int

    def as_dict(self) -> Dict[str, object]:
        return asdict(self)


HISTORICAL_IMPACTS: Tuple[HistoricalImpact, ...] = (
    HistoricalImpact(
        name="Chicxulub",
        energy_megatons=1.0e8,
        crater_km=180.0,
        year=-66_000_000,
        casualties=None,
        description="Yucatán impact linked to the extinction of the non-avian dinosaurs.",
    ),
    HistoricalImpact(
        name="Popigai",
        energy_megatons=8.0e6,
        crater_km=100.0,
        year=-35_700_000,
        casualties=None,
        description="Siberian impact structure famous for its impact diamonds.",
    ),
    HistoricalImpact(
        name="Chesapeake Bay",
        energy_megatons=1.0e6,
        crater_km=40.0,
        year=-35_500_000,
        casualties=None,
        description="Buried marine crater beneath the mouth of Chesapeake Bay.",
    ),
    HistoricalImpact(
        name="Nördlinger Ries",
        energy_megatons=1.8e5,
        crater_km=24.0,
        year=-14_800_000,
        casualties=None,
        description="Bavarian crater whose basin now holds the town of Nördlingen.",
    ),
    HistoricalImpact(
        name="Bosumtwi",
        energy_megatons=1.2e4,
        crater_km=10.5,
        year=-1_070_000,
        casualties=None,
        description="Ghanaian crater now filled by Lake Bosumtwi.",
    ),
    HistoricalImpact(
        name="Lonar",
        energy_megatons=200.0,
        crater_km=1.8,
        year=-50_000,
        casualties=None,
        description="Saline crater lake in basaltic rock of the Deccan Traps, India.",
    ),
    HistoricalImpact(
        name="Barringer (Meteor Crater)",
        energy_megatons=10.0,
        crater_km=1.2,
        year=-50_000,
        casualties=None,
        description="Well-preserved iron-meteorite crater in the Arizona desert.",
    ),
    HistoricalImpact(
        name="Tunguska",
        energy_megatons=12.0,
        crater_km=0.0,
        year=1908,
        casualties=3,
        description="Airburst over Siberia that flattened about 2,000 km² of forest.",
    ),
    HistoricalImpact(
        name="Chelyabinsk",
        energy_megatons=0.5,
        crater_km=0.0,
        year=2013,
        casualties=1491,
        description="Airburst over the Urals; shattered windows injured about 1,500 people.",
    ),
    HistoricalImpact(
        name="Bering Sea fireball",
        energy_megatons=0.173,
        crater_km=0.0,
        year=2018,
        casualties=0,
        description="Airburst over the open ocean detected by military satellites.",
    ),
    HistoricalImpact(
        name="Kaali",
        energy_megatons=0.08,
        crater_km=0.11,
        year=-1500,
        casualties=None,
        description="Crater field on the Estonian island of Saaremaa.",
    ),
    HistoricalImpact(
        name="Sikhote-Alin",
        energy_megatons=0.01,
        crater_km=0.026,
        year=1947,
        casualties=0,
        description="Iron meteorite shower over the Russian Far East, the largest observed fall.",
    ),
    HistoricalImpact(
        name="Carancas",
        energy_megatons=3.0e-6,
        crater_km=0.0135,
        year=2007,
        casualties=0,
        description="Chondrite fall in Peru that left a small water-filled crater.",
    ),
)


HISTORICAL_EARTHQUAKES: Tuple[HistoricalEarthquake, ...] = (
    HistoricalEarthquake(
        name="Valdivia, Chile",
        magnitude=9.5,
        energy_megatons=2682.0,
        year=1960,
        casualties=1655,
        description="The most powerful earthquake ever recorded.",
    ),
    HistoricalEarthquake(
        name="Great Alaska",
        magnitude=9.2,
        energy_megatons=951.5,
        year=1964,
        casualties=131,
        description="Prince William Sound megathrust earthquake and tsunami.",
    ),
    HistoricalEarthquake(
        name="Sumatra-Andaman",
        magnitude=9.1,
        energy_megatons=673.6,
        year=2004,
        casualties=227_898,
        description="Triggered the Indian Ocean tsunami.",
    ),
    HistoricalEarthquake(
        name="Tōhoku, Japan",
        magnitude=9.0,
        energy_megatons=476.9,
        year=2011,
        casualties=19_759,
        description="Megathrust quake whose tsunami caused the Fukushima disaster.",
    ),
    HistoricalEarthquake(
        name="Maule, Chile",
        magnitude=8.8,
        energy_megatons=239.0,
        year=2010,
        casualties=525,
        description="Offshore rupture felt across most of Chile.",
    ),
    HistoricalEarthquake(
        name="Iquique, Chile",
        magnitude=8.2,
        energy_megatons=30.09,
        year=2014,
        casualties=6,
        description="Subduction earthquake off northern Chile.",
    ),
    HistoricalEarthquake(
        name="San Francisco",
        magnitude=7.9,
        energy_megatons=10.68,
        year=1906,
        casualties=3000,
        description="San Andreas rupture followed by days of fires.",
    ),
    HistoricalEarthquake(
        name="Great Kantō, Japan",
        magnitude=7.9,
        energy_megatons=10.68,
        year=1923,
        casualties=105_385,
        description="Devastated Tokyo and Yokohama.",
    ),
    HistoricalEarthquake(
        name="Sichuan, China",
        magnitude=7.9,
        energy_megatons=10.68,
        year=2008,
        casualties=87_587,
        description="Wenchuan earthquake in the Longmen Shan fault zone.",
    ),
    HistoricalEarthquake(
        name="Turkey-Syria",
        magnitude=7.8,
        energy_megatons=7.558,
        year=2023,
        casualties=59_259,
        description="Kahramanmaraş doublet on the East Anatolian Fault.",
    ),
    HistoricalEarthquake(
        name="Gorkha, Nepal",
        magnitude=7.8,
        energy_megatons=7.558,
        year=2015,
        casualties=8964,
        description="Himalayan thrust earthquake that triggered Everest avalanches.",
    ),
    HistoricalEarthquake(
        name="Tangshan, China",
        magnitude=7.6,
        energy_megatons=3.788,
        year=1976,
        casualties=242_769,
        description="Struck an industrial city at night with little warning.",
    ),
    HistoricalEarthquake(
        name="New Madrid",
        magnitude=7.5,
        energy_megatons=2.682,
        year=1811,
        casualties=None,
        description="Intraplate sequence that briefly reversed the Mississippi River.",
    ),
    HistoricalEarthquake(
        name="Haiti",
        magnitude=7.0,
        energy_megatons=0.4769,
        year=2010,
        casualties=160_000,
        description="Shallow quake near Port-au-Prince.",
    ),
    HistoricalEarthquake(
        name="Loma Prieta",
        magnitude=6.9,
        energy_megatons=0.3376,
        year=1989,
        casualties=63,
        description="Collapsed the Cypress Street Viaduct during the World Series.",
    ),
    HistoricalEarthquake(
        name="Nisqually",
        magnitude=6.8,
        energy_megatons=0.239,
        year=2001,
        casualties=1,
        description="Deep intraslab earthquake beneath Puget Sound.",
    ),
    HistoricalEarthquake(
        name="Northridge",
        magnitude=6.7,
        energy_megatons=0.1692,
        year=1994,
        casualties=57,
        description="Blind-thrust quake under the San Fernando Valley.",
    ),
)


CITY_PRESETS: Tuple[CityPreset, ...] = (
    CityPreset(name="New York", latitude_deg=40.7128, longitude_deg=-74.006, population=8_336_817),
    CityPreset(name="London", latitude_deg=51.5074, longitude_deg=-0.1278, population=9_002_488),
    CityPreset(name="Tokyo", latitude_deg=35.6762, longitude_deg=139.6503, population=13_960_000),
    CityPreset(name="Mumbai", latitude_deg=19.076, longitude_deg=72.8777, population=12_442_373),
    CityPreset(name="Sydney", latitude_deg=-33.8688, longitude_deg=151.2093, population=5_312_000),
)


class ReferenceCatalog:
    """Read-only access to the bundled reference datasets."""

    def __init__(
        self,
        impacts: Tuple[HistoricalImpact, ...] = HISTORICAL_IMPACTS,
        earthquakes: Tuple[HistoricalEarthquake, ...] = HISTORICAL_EARTHQUAKES,
        cities: Tuple[CityPreset, ...] = CITY_PRESETS,
    ) -> None:
        self.impacts = tuple(impacts)
        self.earthquakes = tuple(earthquakes)
        self.cities = tuple(cities)
        self._cities_by_name: Dict[str, CityPreset] = {city.name.casefold(): city for city in self.cities}

    def get_city(self, name: str) -> CityPreset:
        """Look up a city preset by name, ignoring case.

        Raises:
            KeyError: no preset with that name.
        """

        try:
            return self._cities_by_name[name.strip().casefold()]
        except KeyError:
            raise KeyError(f"Unknown city preset: {name}") from None


@lru_cache(maxsize=1)
def get_reference_catalog() -> ReferenceCatalog:
    """Shared catalog instance, built on first use."""

    return ReferenceCatalog()
