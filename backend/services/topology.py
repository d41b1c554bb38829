"""Winding topology selection from the impedance transformation ratio."""
import math
from fractions import Fraction

from models import WindingTopology

CLASSICAL_RATIOS = (1, 4, 9, 16)
HYBRID_REFERENCE_RATIOS = (1, 4, 9, 16, 25, 36, 49)
CLASSICAL_TOLERANCE = 0.1  # relative
HYBRID_TOLERANCE = 0.5  # absolute
MAX_TAP_DENOMINATOR = 5

_FILAR_NAMES = {2: "Bifilar", 3: "Trifilar", 4: "Quadrifilar"}


def _normalised_ratio(input_impedance: float, output_impedance: float) -> float:
    if input_impedance <= 0 or output_impedance <= 0:
        raise ValueError("impedances must be positive")
    ratio = output_impedance / input_impedance
    return ratio if ratio >= 1 else 1 / ratio


def filar_name(wire_count: int) -> str:
    return _FILAR_NAMES.get(wire_count, f"{wire_count}-filar")


def should_use_hybrid_design(input_impedance: float, output_impedance: float) -> bool:
    """True when the ratio sits far from every integer-squared ratio."""
    ratio = _normalised_ratio(input_impedance, output_impedance)
    return min(abs(ratio - r) for r in HYBRID_REFERENCE_RATIOS) > HYBRID_TOLERANCE


def _classical_match(ratio: float):
    for standard in CLASSICAL_RATIOS:
        if abs(ratio - standard) <= CLASSICAL_TOLERANCE * standard:
            return standard
    return None


def _connection_text(step_up: bool, numerator: int, denominator: int, winding_type: str) -> str:
    kind = "current" if winding_type == "current" else "voltage"
    if numerator == denominator:
        return f"1:1 {kind} balun, series-connected windings"
    if step_up:
        return f"{kind.capitalize()} transformer, parallel input, series output"
    return f"{kind.capitalize()} transformer, series input, parallel output"


def determine_winding_style(input_impedance: float, output_impedance: float,
                            use_hybrid_design: bool = False,
                            winding_type: str = "current") -> WindingTopology:
    winding_type = winding_type.value if hasattr(winding_type, "value") else winding_type
    step_up = output_impedance >= input_impedance
    ratio = _normalised_ratio(input_impedance, output_impedance)
    impedance_ratio = output_impedance / input_impedance
    turns_ratio = math.sqrt(impedance_ratio)

    if use_hybrid_design or should_use_hybrid_design(input_impedance, output_impedance):
        return WindingTopology(
            style="Hybrid Design", construction="hybrid", wire_count=2,
            connection_details="Combination of 1:1 balun and unun",
            impedance_ratio=impedance_ratio, turns_ratio=turns_ratio,
        )

    standard = _classical_match(ratio)
    if standard is not None:
        numerator, denominator = int(round(math.sqrt(standard))), 1
        wire_count = numerator + denominator
        return WindingTopology(
            style=filar_name(wire_count), construction="classical", wire_count=wire_count,
            connection_details=_connection_text(step_up, numerator, denominator, winding_type),
            impedance_ratio=impedance_ratio, turns_ratio=turns_ratio,
            numerator=numerator, denominator=denominator,
        )

    fraction = Fraction(math.sqrt(ratio)).limit_denominator(MAX_TAP_DENOMINATOR)
    numerator, denominator = fraction.numerator, fraction.denominator
    wire_count = numerator + denominator
    tap = denominator / wire_count
    direction = "step-up" if step_up else "step-down"
    return WindingTopology(
        style=filar_name(wire_count), construction="autotransformer", wire_count=wire_count,
        connection_details=(f"Tapped autotransformer ({direction}, {numerator}:{denominator} turns), "
                            f"tap at {tap:.2f} of total turns"),
        impedance_ratio=impedance_ratio, turns_ratio=turns_ratio,
        numerator=numerator, denominator=denominator, tap_fraction=tap,
    )
