"""Balun/unun design pipeline: evaluation, full-design optimiser, alternatives and hybrid composition."""
import logging
from typing import List

from config import (
    RULE_OF_FOUR_FACTOR, MAX_LINEAR_FLUX_DENSITY_MT, CANDIDATE_MIN_FREQUENCIES,
    STANDARD_CHARACTERISTIC_IMPEDANCES,
)
from models import (
    FerriteCore, DesignConfig, DesignResult, HybridDesignResult, ReferenceData,
    BandPowerPoint, SwrPoint,
)
from services.core_model import calculate_impedance, calculate_losses, max_permissible_core_loss
from services.optimizer import optimize_turns
from services.topology import determine_winding_style, should_use_hybrid_design
from services.validator import validate_design
from services.winding import (
    winding_length_cm, max_frequency_from_length, characteristic_impedance,
    recommended_wire_gauge, band_coverage,
)

logger = logging.getLogger(__name__)

ALTERNATIVE_MIN_FREQUENCIES = (1.8, 3.5, 5.0)
SWR_CURVE_FREQUENCIES = tuple(range(1, 30))
MAX_REPORTED_SWR = 10.0


# ── Single Design Evaluation ──

def compute_design(core: FerriteCore, config: DesignConfig, data: ReferenceData) -> DesignResult:
    """Evaluate one configuration. primary_turns == 0 runs the turns search first."""
    permeability = data.permeability.get(core.mix, ())
    turns = config.primary_turns
    if turns == 0:
        turns = optimize_turns(core, config, permeability, data.duty_cycle_factors)
        config = config.model_copy(update={"primary_turns": turns})

    count = config.core_count
    imp = calculate_impedance(core, turns, config.min_frequency, count, permeability)
    losses = calculate_losses(core, turns, config.min_frequency, count,
                              config.power, config.input_impedance, permeability)
    max_loss = max_permissible_core_loss(core, count, config.operation_mode, data.duty_cycle_factors)

    wire = recommended_wire_gauge(config.power, config.input_impedance, data.wires)
    length = winding_length_cm(core, turns, count, wire.diameter)
    f_max = max_frequency_from_length(length, config)

    return DesignResult(
        config=config,
        core=core,
        characteristic_impedance=characteristic_impedance(config.input_impedance, config.output_impedance),
        calculated_power_rating=config.power * max_loss / losses.power_loss,
        current=losses.current,
        inductance_at_min_freq=imp.inductance,
        reactance_at_min_freq=imp.reactance,
        resistance_at_min_freq=imp.resistance,
        impedance_at_min_freq=imp.impedance,
        q_factor_at_min_freq=imp.q_factor,
        core_loss_at_min_freq=losses.power_loss,
        efficiency_at_min_freq=losses.efficiency,
        power_out_at_min_freq=losses.power_out,
        max_permissible_core_loss=max_loss,
        flux_density_at_min_freq=losses.flux_density,
        winding_length_cm=length,
        max_freq_based_on_length=f_max,
        meets_rule_of_four=imp.reactance >= RULE_OF_FOUR_FACTOR * config.input_impedance,
        within_core_loss_limits=losses.power_loss <= max_loss,
        flux_density_in_linear_region=losses.flux_density < MAX_LINEAR_FLUX_DENSITY_MT,
        recommended_wire=wire,
        winding_info=determine_winding_style(config.input_impedance, config.output_impedance,
                                             config.use_hybrid_design, config.winding_type),
        band_coverage=band_coverage(data.ham_bands, config.min_frequency, config.max_frequency, f_max),
    )


# ── Full-Design Optimiser ──

def optimize_design(core: FerriteCore, config: DesignConfig, data: ReferenceData) -> DesignResult:
    """Auto turns, then raise min frequency, then try a second stacked core until loss fits."""
    auto = config.model_copy(update={"primary_turns": 0})
    result = compute_design(core, auto, data)
    if result.within_core_loss_limits:
        return result

    for f_min in CANDIDATE_MIN_FREQUENCIES:
        if f_min <= config.min_frequency:
            continue
        if f_min > config.max_frequency:
            break
        candidate = compute_design(core, auto.model_copy(update={"min_frequency": f_min}), data)
        if candidate.within_core_loss_limits:
            logger.info(f"{core.id}: loss limit met by raising min frequency to {f_min} MHz")
            return candidate

    if config.core_count == 1:
        candidate = compute_design(core, auto.model_copy(update={"core_count": 2}), data)
        if candidate.within_core_loss_limits:
            logger.info(f"{core.id}: loss limit met with two stacked cores")
            return candidate

    logger.info(f"{core.id}: no configuration within loss limits, returning best-effort design")
    return result


# ── Hybrid Composition ──

def compose_hybrid(core: FerriteCore, config: DesignConfig, data: ReferenceData) -> HybridDesignResult:
    """Split the transformation into a 1:1 current balun plus a target -> output unun."""
    zc = characteristic_impedance(config.input_impedance, config.output_impedance)
    target = min(STANDARD_CHARACTERISTIC_IMPEDANCES, key=lambda z: abs(z - zc))
    common = {"primary_turns": 0, "use_hybrid_design": False}

    balun = compute_design(core, config.model_copy(
        update={**common, "output_impedance": config.input_impedance}), data)
    unun = compute_design(core, config.model_copy(
        update={**common, "input_impedance": target}), data)

    return HybridDesignResult(
        intermediate_impedance=target,
        balun=balun,
        unun=unun,
        balun_validation=validate_design(balun),
        unun_validation=validate_design(unun),
        total_winding_length_cm=balun.winding_length_cm + unun.winding_length_cm,
        total_max_frequency=balun.max_freq_based_on_length + unun.max_freq_based_on_length,
        total_core_loss=balun.core_loss_at_min_freq + unun.core_loss_at_min_freq,
        total_max_permissible_core_loss=balun.max_permissible_core_loss + unun.max_permissible_core_loss,
    )


def _with_hybrid(result: DesignResult, data: ReferenceData) -> DesignResult:
    hybrid = compose_hybrid(result.core, result.config, data)
    return result.model_copy(update={"hybrid": hybrid})


# ── Alternatives ──

def generate_alternatives(result: DesignResult, data: ReferenceData) -> List[DesignResult]:
    core = result.core
    config = result.config.model_copy(update={"primary_turns": 0})
    alternatives = []

    if config.core_count == 1:
        alternatives.append(compute_design(core, config.model_copy(update={"core_count": 2}), data))
    else:
        for f_min in ALTERNATIVE_MIN_FREQUENCIES:
            if f_min <= config.min_frequency or f_min > config.max_frequency:
                continue
            single = compute_design(core, config.model_copy(
                update={"core_count": 1, "min_frequency": f_min}), data)
            if validate_design(single).valid:
                alternatives.append(single)
                break

    if not config.use_hybrid_design and should_use_hybrid_design(config.input_impedance, config.output_impedance):
        hybrid_cfg = config.model_copy(update={"use_hybrid_design": True})
        alternatives.append(_with_hybrid(compute_design(core, hybrid_cfg, data), data))

    return alternatives


def design_balun(core: FerriteCore, config: DesignConfig, data: ReferenceData,
                 include_alternatives: bool = True) -> DesignResult:
    """Top-level design entry: fixed turns are honoured, zero turns run the full optimiser."""
    if config.primary_turns == 0:
        result = optimize_design(core, config, data)
    else:
        result = compute_design(core, config, data)

    if result.config.use_hybrid_design:
        result = _with_hybrid(result, data)
    if include_alternatives:
        result = result.model_copy(update={"alternative_configurations": generate_alternatives(result, data)})

    logger.info(f"Designed {core.id} x{result.config.core_count}: {result.config.primary_turns} turns, "
                f"{result.config.input_impedance:g}->{result.config.output_impedance:g} ohm, "
                f"loss {result.core_loss_at_min_freq:.2f}/{result.max_permissible_core_loss:.2f} W")
    return result


# ── Sweeps ──

def calculate_band_power_data(core: FerriteCore, turns: int, core_count: int, power: float,
                              input_impedance: float, data: ReferenceData) -> List[BandPowerPoint]:
    """Per-band performance at each ham band centre."""
    permeability = data.permeability.get(core.mix, ())
    points = []
    for band in data.ham_bands:
        f = (band.min + band.max) / 2
        imp = calculate_impedance(core, turns, f, core_count, permeability)
        losses = calculate_losses(core, turns, f, core_count, power, input_impedance, permeability)
        points.append(BandPowerPoint(
            band=band.name, frequency=f, inductance=imp.inductance, reactance=imp.reactance,
            resistance=imp.resistance, q_factor=imp.q_factor, flux_density=losses.flux_density,
            power_out=losses.power_out, efficiency=losses.efficiency,
            swr=power / max(losses.power_out, 1e-3),
        ))
    return points


def calculate_swr_curve(core: FerriteCore, turns: int, core_count: int, power: float,
                        input_impedance: float, data: ReferenceData) -> List[SwrPoint]:
    permeability = data.permeability.get(core.mix, ())
    curve = []
    for f in SWR_CURVE_FREQUENCIES:
        losses = calculate_losses(core, turns, f, core_count, power, input_impedance, permeability)
        swr = min(power / max(losses.power_out, 1e-3), MAX_REPORTED_SWR)
        curve.append(SwrPoint(frequency=float(f), swr=swr))
    return curve
