"""Tests for impact metric estimation."""
import math

import pytest

from endurance.engine.physics_engine import (
    MEGATON_TNT_JOULES,
    AsteroidParameters,
    DomainError,
    calculate_crater_diameter,
    calculate_mass,
    compute_impact_metrics,
)


class TestReferenceScenario:
    """1 km stony asteroid at 20 km/s."""

    def setup_method(self):
        self.metrics = compute_impact_metrics(1000, 20)

    def test_kinetic_energy(self):
        expected = 0.5 * (3000 * 4 / 3 * math.pi * 500**3) * 20_000**2
        assert self.metrics.kinetic_energy_joules == pytest.approx(expected)
        assert self.metrics.kinetic_energy_joules == pytest.approx(3.1416e20, rel=1e-4)

    def test_tnt_equivalent(self):
        assert self.metrics.tnt_megatons == pytest.approx(75085.87)

    def test_crater_and_destruction_radius(self):
        assert self.metrics.crater_diameter_km == 1.8
        assert self.metrics.destruction_radius_km == 2.7

    def test_seismic_magnitude_rounded_to_one_decimal(self):
        assert self.metrics.seismic_equivalent_magnitude == 10.8


class TestHelpers:

    def test_megaton_constant(self):
        assert MEGATON_TNT_JOULES == pytest.approx(4.184e15)

    def test_mass_of_sphere(self):
        assert calculate_mass(2.0, 1000.0) == pytest.approx(4 / 3 * math.pi * 1000.0)

    def test_crater_density_scaling_reproduced_literally(self):
        expected = 1.8 * (250 / 1000) ** 0.78 * (8000 / 3000) ** 0.33
        assert calculate_crater_diameter(250, 8000) == pytest.approx(expected)

    def test_denser_impactor_rounds_crater(self):
        metrics = compute_impact_metrics(250, 17, 8000)
        expected = 1.8 * (250 / 1000) ** 0.78 * (8000 / 3000) ** 0.33
        assert metrics.crater_diameter_km == round(expected, 2)
        assert metrics.destruction_radius_km == round(expected * 1.5, 2)


class TestCasualties:

    def test_no_population_means_unknown(self):
        assert compute_impact_metrics(300, 18).approx_casualties is None

    def test_population_scaled_by_destruction_area(self):
        metrics = compute_impact_metrics(1000, 20, target_population=1_000_000)
        assert metrics.approx_casualties == math.floor(1_000_000 * math.pi * 2.7**2 / 100 * 0.5)
        assert metrics.approx_casualties == 114511
        assert isinstance(metrics.approx_casualties, int)

    def test_zero_population_is_zero_not_unknown(self):
        assert compute_impact_metrics(1000, 20, target_population=0).approx_casualties == 0


class TestMonotonicity:

    def test_energy_and_crater_increase_with_diameter(self):
        results = [compute_impact_metrics(d, 17) for d in (10, 50, 120, 400, 900, 2500)]
        energies = [m.kinetic_energy_joules for m in results]
        craters = [m.crater_diameter_km for m in results]
        assert energies == sorted(energies) and len(set(energies)) == len(energies)
        assert craters == sorted(craters) and len(set(craters)) == len(craters)

    def test_energy_increases_with_velocity(self):
        energies = [compute_impact_metrics(300, v).kinetic_energy_joules for v in (5, 11, 17, 25, 40, 70)]
        assert energies == sorted(energies) and len(set(energies)) == len(energies)


class TestDomainErrors:

    @pytest.mark.parametrize(
        "diameter, velocity, density",
        [
            (0, 20, 3000),
            (-5, 20, 3000),
            (100, 0, 3000),
            (100, -1, 3000),
            (100, 20, 0),
            (float("nan"), 20, 3000),
        ],
    )
    def test_non_positive_inputs_rejected(self, diameter, velocity, density):
        with pytest.raises(DomainError):
            compute_impact_metrics(diameter, velocity, density)

    def test_domain_error_is_value_error(self):
        assert issubclass(DomainError, ValueError)

    def test_implausible_but_positive_input_accepted(self):
        metrics = compute_impact_metrics(1e6, 300, 20_000)
        assert metrics.tnt_megatons > 1e12


class TestAsteroidParameters:

    def test_defaults_and_mass(self):
        params = AsteroidParameters(diameter_m=100, velocity_kms=12)
        assert params.density_kg_m3 == 3000
        assert params.mass_kg == pytest.approx(calculate_mass(100, 3000))

    def test_validates_on_construction(self):
        with pytest.raises(DomainError):
            AsteroidParameters(diameter_m=100, velocity_kms=-3)

    def test_fields_feed_metric_calculation(self):
        params = AsteroidParameters(diameter_m=140, velocity_kms=15, density_kg_m3=2600)
        assert compute_impact_metrics(**params.as_dict()) == compute_impact_metrics(140, 15, 2600)
