"""Ferrite core electrical and thermal model."""
import math
from typing import Dict, Sequence

from config import MU0, MAX_TEMP_RISE_C
from models import FerriteCore, PermeabilityPoint, ImpedanceResult, LossResult
from services.permeability import interpolate_permeability


# ── Input Checks ──

def _check_inputs(turns: int, frequency_mhz: float, core_count: int):
    if turns <= 0:
        raise ValueError(f"turns must be positive, got {turns}")
    if frequency_mhz <= 0:
        raise ValueError(f"frequency must be positive, got {frequency_mhz}")
    if core_count < 1:
        raise ValueError(f"core_count must be at least 1, got {core_count}")


# ── Inductance / Impedance ──

def air_core_inductance(core: FerriteCore, turns: int, core_count: int = 1) -> float:
    """Inductance (H) of the winding with mu_r = 1, scaled by stacked core count."""
    dims = core.dimensions
    return MU0 * turns ** 2 * dims.effective_area_m2 / dims.path_length_m * core_count


def calculate_impedance(core: FerriteCore, turns: int, frequency_mhz: float, core_count: int,
                        permeability: Sequence[PermeabilityPoint]) -> ImpedanceResult:
    _check_inputs(turns, frequency_mhz, core_count)
    mu_prime, mu_double_prime = interpolate_permeability(permeability, frequency_mhz, core.initial_permeability)
    omega = 2 * math.pi * frequency_mhz * 1e6
    l0 = air_core_inductance(core, turns, core_count)

    ls = l0 * mu_prime
    rs = omega * l0 * mu_double_prime
    xs = omega * ls
    z = math.sqrt(xs ** 2 + rs ** 2)
    q = xs / rs if rs != 0 else math.inf
    return ImpedanceResult(inductance=ls * 1e6, resistance=rs, reactance=xs, impedance=z, q_factor=q)


def calculate_losses(core: FerriteCore, turns: int, frequency_mhz: float, core_count: int,
                     power: float, source_impedance: float,
                     permeability: Sequence[PermeabilityPoint]) -> LossResult:
    """Drive the winding from a source of source_impedance at power watts."""
    _check_inputs(turns, frequency_mhz, core_count)
    if power <= 0:
        raise ValueError(f"power must be positive, got {power}")
    if source_impedance <= 0:
        raise ValueError(f"source impedance must be positive, got {source_impedance}")

    imp = calculate_impedance(core, turns, frequency_mhz, core_count, permeability)
    voltage = math.sqrt(power * source_impedance)
    current = voltage / imp.impedance
    power_loss = voltage ** 2 / imp.impedance
    power_out = power - power_loss
    efficiency = power_out / power * 100

    area = core.dimensions.effective_area_m2
    flux_density = (imp.inductance * 1e-6) * current / (turns * area * core_count) * 1000

    return LossResult(
        power_loss=power_loss, current=current, efficiency=efficiency,
        input_voltage=voltage, inductance=imp.inductance, resistance=imp.resistance,
        impedance=imp.impedance, flux_density=flux_density, power_out=power_out,
    )


# ── Thermal Limit ──

def max_permissible_core_loss(core: FerriteCore, core_count: int, operation_mode: str,
                              duty_cycle_factors: Dict[str, float]) -> float:
    """Average loss (W) that keeps the core within its temperature rise.

    Lower duty cycle allows proportionally more loss during key-down.
    """
    if core_count < 1:
        raise ValueError(f"core_count must be at least 1, got {core_count}")
    mode = operation_mode.value if hasattr(operation_mode, "value") else operation_mode
    duty = duty_cycle_factors.get(mode, 1.0)
    volume = core.dimensions.volume_cm3 * core_count
    return MAX_TEMP_RISE_C * core.thermal_coefficient * math.sqrt(volume) / duty
