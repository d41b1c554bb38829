"""Winding geometry: wire length, length-limited frequency, wire gauge and band coverage."""
import logging
import math
from typing import List, Sequence

from config import (
    SPEED_OF_LIGHT, WINDING_LENGTH_FACTOR, WINDING_LEAD_MARGIN_CM,
    MAX_WINDING_LENGTH_FRACTION, WIRE_CURRENT_SAFETY_MARGIN,
)
from models import FerriteCore, DesignConfig, WireSpec, HamBand, BandCoverage

logger = logging.getLogger(__name__)


def winding_length_cm(core: FerriteCore, turns: int, core_count: int, wire_diameter_mm: float) -> float:
    """Wire length for one winding including insulation allowance and leads."""
    dims = core.dimensions
    turn_length_cm = (dims.od - dims.id + core_count * 2 * dims.height) / 10 + 2 * wire_diameter_mm / 10
    return WINDING_LENGTH_FACTOR * turns * turn_length_cm + WINDING_LEAD_MARGIN_CM


def max_frequency_from_length(length_cm: float, config: DesignConfig) -> float:
    """Highest frequency (MHz) where the winding stays a short transmission line.

    A 1:1 design is a matched line so the configured ceiling is returned as is.
    """
    if config.input_impedance == config.output_impedance:
        return config.max_frequency
    if length_cm <= 0:
        raise ValueError(f"winding length must be positive, got {length_cm}")
    length_m = length_cm / 100
    # bifilar pair: electrical length counts both conductors
    return SPEED_OF_LIGHT * MAX_WINDING_LENGTH_FRACTION / (2 * length_m) / 1e6


def characteristic_impedance(input_impedance: float, output_impedance: float) -> float:
    return math.sqrt(input_impedance * output_impedance)


def recommended_wire_gauge(power: float, impedance: float, wires: Sequence[WireSpec]) -> WireSpec:
    """Thinnest wire whose current capacity covers the RF current with margin."""
    if power <= 0 or impedance <= 0:
        raise ValueError("power and impedance must be positive")
    required = math.sqrt(power / impedance) * WIRE_CURRENT_SAFETY_MARGIN
    by_gauge = sorted(wires, key=lambda w: w.gauge)
    chosen = None
    for wire in by_gauge:
        if wire.current_capacity >= required:
            chosen = wire
    if chosen is None:
        chosen = by_gauge[0]
        logger.warning(f"No wire gauge carries {required:.2f} A, using AWG {chosen.gauge}")
    return chosen


def band_coverage(bands: Sequence[HamBand], min_frequency: float, max_frequency: float,
                  length_max_frequency: float) -> List[BandCoverage]:
    upper = min(max_frequency, length_max_frequency)
    return [
        BandCoverage(name=b.name, min=b.min, max=b.max,
                     covered=b.min >= min_frequency and b.max <= upper)
        for b in bands
    ]
