"""Coax-wound helical RF choke model.

Inductance uses a Nagaoka-corrected solenoid formula, capacitance Knight's
multi-loop self-capacitance, and AC resistance combines skin effect with the
Medhurst proximity factor table.
"""
import cmath
import logging
import math
from typing import List, Optional, Tuple

from config import MU0, CU_SIGMA, CU_RESISTIVITY, SWEEP_POINTS
from models import (
    InductorParameters, InductorResult, CoaxCable, ComplexImpedance, ChokeVerdict,
    FrequencyResponsePoint, ReferenceData,
)
from services.catalog import find_region_band

logger = logging.getLogger(__name__)

EXCELLENT_CHOKE_OHMS = 3000.0
USABLE_CHOKE_OHMS = 1000.0

# Medhurst proximity factor. Row 0: pitch ratios; column 0: coil length / diameter.
PROXIMITY_RESISTANCE = [
    [0.0, 1.0, 1.111, 1.25, 1.429, 1.667, 2.0, 2.5, 3.333, 5.00, 10.0],
    [0.0, 5.31, 3.73, 2.74, 2.12, 1.74, 1.44, 1.20, 1.16, 1.07, 1.02],
    [0.2, 5.45, 3.84, 2.83, 2.20, 1.77, 1.48, 1.29, 1.19, 1.08, 1.02],
    [0.4, 5.65, 3.99, 2.97, 2.28, 1.83, 1.54, 1.33, 1.21, 1.08, 1.03],
    [0.6, 5.80, 4.11, 3.10, 2.38, 1.89, 1.60, 1.38, 1.22, 1.10, 1.03],
    [0.8, 5.80, 4.17, 3.20, 2.44, 1.92, 1.64, 1.42, 1.23, 1.10, 1.03],
    [1.0, 5.55, 4.10, 3.17, 2.47, 1.94, 1.67, 1.45, 1.24, 1.10, 1.03],
    [2.0, 4.10, 3.36, 2.74, 2.32, 1.98, 1.74, 1.50, 1.28, 1.13, 1.04],
    [4.0, 3.54, 3.05, 2.60, 2.27, 2.01, 1.78, 1.54, 1.32, 1.15, 1.04],
    [6.0, 3.31, 2.92, 2.60, 2.29, 2.03, 1.80, 1.56, 1.34, 1.16, 1.04],
    [8.0, 3.20, 2.90, 2.62, 2.34, 2.08, 1.81, 1.57, 1.34, 1.165, 1.04],
    [10.0, 3.23, 2.93, 2.65, 2.37, 2.10, 1.83, 1.58, 1.35, 1.17, 1.04],
    [999.0, 3.41, 3.11, 2.815, 2.51, 2.22, 1.93, 1.65, 1.395, 1.19, 1.05],
]


# ── Coil Primitives (SI units) ──

def dc_resistance(loop_d: float, cond_d: float, pitch_ratio: float, turns: int) -> float:
    spacing = pitch_ratio * cond_d
    helix_factor = math.sqrt(1.0 + spacing ** 2 / loop_d ** 2)
    length = math.pi * loop_d * turns * helix_factor
    area = math.pi * (cond_d / 2) ** 2
    return CU_RESISTIVITY * length / area


def skin_depth(frequency_hz: float) -> float:
    return math.sqrt(1.0 / (math.pi * frequency_hz * MU0 * CU_SIGMA))


def skin_effect_factor(cond_d: float, delta: float) -> float:
    """AC/DC resistance ratio of a round conductor; 1 once current fills the section."""
    if delta >= cond_d / 2:
        return 1.0
    return cond_d ** 2 / (4.0 * (cond_d * delta - delta ** 2))


def nagaoka_coefficient(loop_d: float, cond_d: float, pitch_ratio: float, turns: int) -> float:
    x = loop_d / (pitch_ratio * cond_d * turns)
    zk = 2.0 / (math.pi * x)
    k0 = 1.0 / (math.log(8.0 / math.pi) - 0.5)
    k2 = 24.0 / (3.0 * math.pi ** 2 - 16.0)
    w = -0.47 / (0.755 + x) ** 1.44
    p = k0 + 3.437 / x + k2 / x ** 2 + w
    return zk * (math.log(1 + 1 / zk) + 1 / p)


def inductance(loop_d: float, cond_d: float, pitch_ratio: float, turns: int) -> float:
    radius = loop_d / 2
    coil_length = cond_d * pitch_ratio * turns
    k = nagaoka_coefficient(loop_d, cond_d, pitch_ratio, turns)
    return turns ** 2 * MU0 * math.pi * radius ** 2 * k / coil_length


def multiloop_capacitance(loop_d: float, cond_d: float, pitch_ratio: float, turns: int,
                          eps_inner: float = 1.0, eps_outer: float = 1.0) -> float:
    pitch = pitch_ratio * cond_d
    form_factor = turns * pitch / loop_d
    k_l = nagaoka_coefficient(loop_d, cond_d, pitch_ratio, turns)

    kct = 1.0 / k_l - 1.0
    c_tdw = 11.27350207 * eps_outer * form_factor * (1.0 + kct * (1.0 + eps_inner / eps_outer) / 2.0)
    c_iae = 17.70837564 * (eps_inner + eps_outer) / math.log(1.0 + math.pi ** 2 * form_factor)
    return 1e-12 * (c_tdw / math.sqrt(1 - pitch ** 2 / loop_d ** 2) + c_iae) * loop_d


def _bracket(values: List[float], x: float, lo: int, hi: int) -> int:
    """Index i in [lo, hi] with values[i] <= x < values[i + 1], clamped."""
    idx = lo
    for k in range(lo, hi + 1):
        if values[k] <= x:
            idx = k
    return idx


def proximity_factor(loop_d: float, cond_d: float, pitch_ratio: float, turns: int) -> float:
    """Bilinear interpolation in the proximity table, clamped to its bounds."""
    length_ratio = turns * pitch_ratio * cond_d / loop_d
    pitches = PROXIMITY_RESISTANCE[0]
    lengths = [row[0] for row in PROXIMITY_RESISTANCE]
    i = _bracket(pitches, pitch_ratio, 1, len(pitches) - 2)
    j = _bracket(lengths, length_ratio, 1, len(lengths) - 2)

    tx = (pitch_ratio - pitches[i]) / (pitches[i + 1] - pitches[i])
    ty = (length_ratio - lengths[j]) / (lengths[j + 1] - lengths[j])
    tx = min(max(tx, 0.0), 1.0)
    ty = min(max(ty, 0.0), 1.0)

    row_lo, row_hi = PROXIMITY_RESISTANCE[j], PROXIMITY_RESISTANCE[j + 1]
    t1 = row_lo[i] + tx * (row_lo[i + 1] - row_lo[i])
    t2 = row_hi[i] + tx * (row_hi[i + 1] - row_hi[i])
    return t1 + ty * (t2 - t1)


def self_resonant_frequency(l_h: float, c_f: float) -> float:
    return 1.0 / (2.0 * math.pi * math.sqrt(l_h * c_f))


def evaluate_choke(impedance_magnitude: float, over_srf: bool) -> ChokeVerdict:
    if over_srf:
        return ChokeVerdict(is_good_choke=False, performance_level="poor",
                            message="Operating above the self-resonant frequency, not usable as a choke.")
    if impedance_magnitude >= EXCELLENT_CHOKE_OHMS:
        return ChokeVerdict(is_good_choke=True, performance_level="excellent",
                            message="Excellent choke, impedance above 3 kOhm.")
    if impedance_magnitude >= USABLE_CHOKE_OHMS:
        return ChokeVerdict(is_good_choke=True, performance_level="usable",
                            message="Usable choke, impedance between 1 and 3 kOhm.")
    return ChokeVerdict(is_good_choke=False, performance_level="poor",
                        message="Poor choke, impedance below 1 kOhm. Not recommended.")


# ── Choke Evaluation ──

def resolve_frequency(params: InductorParameters, data: ReferenceData) -> float:
    """Explicit frequency, else the centre of the selected band in the IARU region."""
    if params.frequency:
        return params.frequency
    if not params.ham_band:
        raise ValueError("Either frequency or ham_band must be given")
    return find_region_band(data, params.iaru_region, params.ham_band).center


def _geometry(params: InductorParameters, cable: CoaxCable) -> Tuple[float, float]:
    cond_d = cable.outer_diameter * 1e-3
    loop_d = (params.former_diameter + cable.insulation_thickness) * 1e-3 + cond_d / 2
    if params.pitch_ratio * cond_d >= loop_d:
        raise ValueError("Turn pitch must be smaller than the coil diameter")
    return loop_d, cond_d


def calculate_inductor(params: InductorParameters, cable: CoaxCable, frequency_mhz: float) -> InductorResult:
    if frequency_mhz <= 0:
        raise ValueError(f"frequency must be positive, got {frequency_mhz}")
    loop_d, cond_d = _geometry(params, cable)
    n, pitch = params.turn_count, params.pitch_ratio
    f_hz = frequency_mhz * 1e6

    l_h = inductance(loop_d, cond_d, pitch, n)
    c_f = multiloop_capacitance(loop_d, cond_d, pitch, n)
    r_dc = dc_resistance(loop_d, cond_d, pitch, n)
    srf = self_resonant_frequency(l_h, c_f)
    wire_length = math.hypot(n * pitch * cond_d, math.pi * loop_d * n)

    delta = skin_depth(f_hz)
    r_ac = r_dc * skin_effect_factor(cond_d, delta) * proximity_factor(loop_d, cond_d, pitch, n)
    x_l = 2.0 * math.pi * f_hz * l_h
    x_c = -1.0 / (2.0 * math.pi * f_hz * c_f)

    z_l = complex(r_ac, x_l)
    z_c = complex(0.0, x_c)
    z = z_l * z_c / (z_l + z_c)
    magnitude = abs(z)
    q = abs(z.imag) / z.real if z.real else math.inf

    cond_mm = cond_d * 1e3
    mean_mm = loop_d * 1e3
    spacing_mm = pitch * cond_mm
    over_srf = f_hz >= srf

    return InductorResult(
        frequency=frequency_mhz,
        inductance=l_h, capacitance=c_f, dc_resistance=r_dc,
        self_resonant_freq=srf, wire_length=wire_length,
        skin_depth=delta, ac_resistance=r_ac,
        inductive_reactance=x_l, capacitive_reactance=x_c,
        complex_impedance=ComplexImpedance(re=z.real, im=z.imag),
        impedance_magnitude=magnitude, quality_factor=q,
        conductor_mean_diameter=mean_mm, outer_diameter=mean_mm + cond_mm,
        turn_spacing=spacing_mm, edge_to_edge_gap=spacing_mm - cond_mm,
        coil_length=n * spacing_mm,
        over_srf=over_srf,
        verdict=evaluate_choke(magnitude, over_srf),
    )


def frequency_response(params: InductorParameters, cable: CoaxCable, start_mhz: float, stop_mhz: float,
                       num_points: Optional[int] = None) -> Tuple[float, List[FrequencyResponsePoint]]:
    """Linear sweep; points at or above SRF carry no impedance data."""
    num_points = num_points if num_points else SWEEP_POINTS
    if num_points < 2:
        raise ValueError("num_points must be at least 2")
    if start_mhz <= 0 or stop_mhz <= start_mhz:
        raise ValueError("sweep requires 0 < start_mhz < stop_mhz")

    loop_d, cond_d = _geometry(params, cable)
    l_h = inductance(loop_d, cond_d, params.pitch_ratio, params.turn_count)
    c_f = multiloop_capacitance(loop_d, cond_d, params.pitch_ratio, params.turn_count)
    srf_mhz = self_resonant_frequency(l_h, c_f) / 1e6

    step = (stop_mhz - start_mhz) / (num_points - 1)
    points = []
    for k in range(num_points):
        f = start_mhz + k * step
        if f >= srf_mhz:
            points.append(FrequencyResponsePoint(frequency=f, over_srf=True, performance_level="poor"))
            continue
        result = calculate_inductor(params, cable, f)
        z = complex(result.complex_impedance.re, result.complex_impedance.im)
        points.append(FrequencyResponsePoint(
            frequency=f,
            impedance_magnitude=result.impedance_magnitude,
            phase=math.degrees(cmath.phase(z)),
            resistance=z.real,
            reactance=z.imag,
            over_srf=False,
            performance_level=result.verdict.performance_level,
        ))

    logger.info(f"Choke sweep {start_mhz}-{stop_mhz} MHz, {num_points} points, SRF {srf_mhz:.2f} MHz")
    return srf_mhz, points
