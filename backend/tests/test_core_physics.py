"""
Core physics tests for the balun designer.

Test Coverage:
1. Permeability interpolation - exact points, clamping, linear interpolation, fallback
2. Core electrical model - FT140-43 at 3.5 MHz / 6 turns against hand-computed values
3. Monotonicity of reactance and impedance in turns
4. Thermal limit - duty-cycle ordering and core stacking
5. Winding geometry - length, length-limited max frequency, 1:1 pass-through
6. Wire gauge selection and band coverage
"""

import math

import pytest

from models import DesignConfig, PermeabilityPoint, HamBand
from services.catalog import build_reference_data, find_core
from services.core_model import calculate_impedance, calculate_losses, max_permissible_core_loss
from services.permeability import interpolate_permeability
from services.winding import (
    winding_length_cm, max_frequency_from_length, recommended_wire_gauge,
    band_coverage, characteristic_impedance,
)


@pytest.fixture(scope="module")
def data():
    return build_reference_data()


@pytest.fixture(scope="module")
def ft140(data):
    return find_core(data, "FT140-43")


@pytest.fixture(scope="module")
def mix43(data):
    return data.permeability["43"]


def close(actual, expected, rel=0.01):
    return abs(actual - expected) <= rel * abs(expected)


class TestPermeabilityInterpolation:
    """Complex permeability lookup"""

    def test_exact_table_point(self, mix43):
        """A frequency present in the table returns that entry unchanged"""
        mu_p, mu_pp = interpolate_permeability(mix43, 3.4)
        assert mu_p == 480.6 and mu_pp == 219.6, f"Expected (480.6, 219.6), got ({mu_p}, {mu_pp})"

    def test_clamps_below_and_above_range(self, mix43):
        """Outside the table the boundary entries are returned"""
        assert interpolate_permeability(mix43, 0.001) == (791.5, 3.5)
        assert interpolate_permeability(mix43, 500.0) == (41.5, 104.2)

    def test_linear_between_points(self, mix43):
        """3.5 MHz sits 0.1/0.56 of the way from 3.4 to 3.96 MHz"""
        mu_p, mu_pp = interpolate_permeability(mix43, 3.5)
        ratio = 0.1 / 0.56
        assert math.isclose(mu_p, 480.6 + ratio * (446.9 - 480.6), rel_tol=1e-9)
        assert math.isclose(mu_pp, 219.6 + ratio * (226.8 - 219.6), rel_tol=1e-9)
        print(f"✓ mu' = {mu_p:.2f}, mu'' = {mu_pp:.2f} at 3.5 MHz")

    def test_unsorted_table_is_sorted_first(self):
        """Point order in the input does not matter"""
        points = [
            PermeabilityPoint(frequency=10.0, mu_prime=100, mu_double_prime=50),
            PermeabilityPoint(frequency=1.0, mu_prime=200, mu_double_prime=10),
        ]
        assert interpolate_permeability(points, 5.5) == pytest.approx((150.0, 30.0))

    def test_empty_table_falls_back_to_initial_permeability(self):
        """Missing data degrades to (mu_i, 0.1 mu_i) without raising"""
        assert interpolate_permeability((), 7.0, 850) == (850, 85.0)

    def test_round_trip_every_table_point(self, data):
        """Every published point is reproduced exactly"""
        for mix, points in data.permeability.items():
            for p in points:
                got = interpolate_permeability(points, p.frequency)
                assert got == (p.mu_prime, p.mu_double_prime), f"Mix {mix} at {p.frequency} MHz returned {got}"


class TestCoreElectricalModel:
    """FT140-43, 6 turns, 3.5 MHz, single core, 100 W from 50 ohm"""

    def test_impedance_matches_hand_calculation(self, ft140, mix43):
        imp = calculate_impedance(ft140, 6, 3.5, 1, mix43)
        assert close(imp.inductance, 19.12), f"Inductance {imp.inductance} uH"
        assert close(imp.reactance, 420.5), f"Reactance {imp.reactance} ohm"
        assert close(imp.resistance, 195.7), f"Resistance {imp.resistance} ohm"
        assert close(imp.impedance, 463.9), f"Impedance {imp.impedance} ohm"
        assert close(imp.q_factor, 2.149), f"Q {imp.q_factor}"
        print(f"✓ Xs={imp.reactance:.1f} Rs={imp.resistance:.1f} |Z|={imp.impedance:.1f}")

    def test_losses_match_hand_calculation(self, ft140, mix43):
        losses = calculate_losses(ft140, 6, 3.5, 1, 100, 50, mix43)
        assert close(losses.input_voltage, 70.71)
        assert close(losses.power_loss, 10.78), f"Core loss {losses.power_loss} W"
        assert close(losses.current, 0.1524), f"Current {losses.current} A"
        assert close(losses.flux_density, 5.886), f"Flux density {losses.flux_density} mT"
        assert math.isclose(losses.power_out, 100 - losses.power_loss)
        assert math.isclose(losses.efficiency, losses.power_out)

    def test_reactance_and_impedance_increase_with_turns(self, ft140, mix43):
        previous = None
        for turns in range(1, 21):
            imp = calculate_impedance(ft140, turns, 7.0, 1, mix43)
            if previous:
                assert imp.reactance > previous.reactance, f"Reactance not increasing at N={turns}"
                assert imp.impedance > previous.impedance, f"Impedance not increasing at N={turns}"
            previous = imp

    def test_stacking_scales_inductance(self, ft140, mix43):
        single = calculate_impedance(ft140, 6, 3.5, 1, mix43)
        double = calculate_impedance(ft140, 6, 3.5, 2, mix43)
        assert math.isclose(double.inductance, 2 * single.inductance, rel_tol=1e-9)

    @pytest.mark.parametrize("turns,freq,count", [(0, 3.5, 1), (6, 0, 1), (6, -1, 1), (6, 3.5, 0)])
    def test_invalid_inputs_raise(self, ft140, mix43, turns, freq, count):
        with pytest.raises(ValueError):
            calculate_impedance(ft140, turns, freq, count, mix43)

    def test_invalid_power_raises(self, ft140, mix43):
        with pytest.raises(ValueError):
            calculate_losses(ft140, 6, 3.5, 1, 0, 50, mix43)
        with pytest.raises(ValueError):
            calculate_losses(ft140, 6, 3.5, 1, 100, 0, mix43)


class TestThermalLimit:
    """Permissible core loss from temperature rise"""

    def test_ssb_limit(self, ft140, data):
        limit = max_permissible_core_loss(ft140, 1, "SSB", data.duty_cycle_factors)
        assert close(limit, 12.17), f"SSB limit {limit} W"

    def test_lower_duty_cycle_allows_more_loss(self, ft140, data):
        limits = [max_permissible_core_loss(ft140, 1, mode, data.duty_cycle_factors)
                  for mode in ("SSB", "CW", "DIGITAL", "CONTINUOUS")]
        assert limits == sorted(limits, reverse=True), f"Limits not ordered by duty cycle: {limits}"
        assert max_permissible_core_loss(ft140, 1, "50_PERCENT", data.duty_cycle_factors) == \
            max_permissible_core_loss(ft140, 1, "CW", data.duty_cycle_factors)

    def test_stacking_grows_with_sqrt_volume(self, ft140, data):
        one = max_permissible_core_loss(ft140, 1, "CONTINUOUS", data.duty_cycle_factors)
        four = max_permissible_core_loss(ft140, 4, "CONTINUOUS", data.duty_cycle_factors)
        assert math.isclose(four, 2 * one, rel_tol=1e-9)


class TestWindingGeometry:
    """Winding length and length-limited frequency"""

    def test_winding_length(self, ft140):
        length = winding_length_cm(ft140, 6, 1, 1.024)
        assert close(length, 34.12), f"Winding length {length} cm"

    def test_length_limited_max_frequency(self):
        cfg = DesignConfig(input_impedance=50, output_impedance=200)
        f_max = max_frequency_from_length(34.12, cfg)
        assert close(f_max, 43.93), f"Max frequency {f_max} MHz"

    def test_one_to_one_passes_max_frequency_through(self):
        cfg = DesignConfig(input_impedance=50, output_impedance=50, max_frequency=54)
        assert max_frequency_from_length(500.0, cfg) == 54

    def test_longer_winding_lowers_max_frequency(self):
        cfg = DesignConfig()
        assert max_frequency_from_length(80, cfg) < max_frequency_from_length(40, cfg)

    def test_wire_gauge_for_100w_50_ohm(self, data):
        """sqrt(100/50) * 1.5 = 2.12 A needs AWG 18"""
        wire = recommended_wire_gauge(100, 50, data.wires)
        assert wire.gauge == 18, f"Expected AWG 18, got {wire.gauge}"

    def test_higher_power_needs_thicker_wire(self, data):
        assert recommended_wire_gauge(1500, 50, data.wires).gauge < recommended_wire_gauge(100, 50, data.wires).gauge

    def test_characteristic_impedance(self):
        assert characteristic_impedance(50, 200) == 100
        assert characteristic_impedance(50, 450) == 150

    def test_band_coverage(self):
        bands = [HamBand(name="80m", min=3.5, max=4.0), HamBand(name="10m", min=28.0, max=29.7),
                 HamBand(name="160m", min=1.8, max=2.0)]
        coverage = {b.name: b.covered for b in band_coverage(bands, 3.5, 30, 25)}
        assert coverage == {"80m": True, "10m": False, "160m": False}
