"""Design validation: physical constraint checks producing error/warning/info messages."""
from config import (
    RULE_OF_FOUR_FACTOR, MAX_LINEAR_FLUX_DENSITY_MT, Q_WARNING_THRESHOLD,
    STANDARD_CHARACTERISTIC_IMPEDANCES, CHARACTERISTIC_IMPEDANCE_TOLERANCE,
)
from models import DesignResult, ValidationMessage, ValidationResult

_SEVERITY_ORDER = {"error": 0, "warning": 1, "info": 2}


def validate_design(design: DesignResult) -> ValidationResult:
    cfg = design.config
    core = design.core
    messages = []

    if not design.meets_rule_of_four:
        messages.append(ValidationMessage(type="error", message=(
            f"Rule of four not met: reactance {design.reactance_at_min_freq:.1f} ohm is below "
            f"{RULE_OF_FOUR_FACTOR * cfg.input_impedance:.0f} ohm at {cfg.min_frequency} MHz. "
            f"Increase turns or use a higher-permeability core.")))

    if not design.within_core_loss_limits:
        messages.append(ValidationMessage(type="error", message=(
            f"Core loss {design.core_loss_at_min_freq:.1f} W exceeds the permissible "
            f"{design.max_permissible_core_loss:.1f} W. Reduce power, add turns or stack cores.")))

    if not design.flux_density_in_linear_region:
        messages.append(ValidationMessage(type="warning", message=(
            f"Flux density {design.flux_density_at_min_freq:.1f} mT exceeds the linear region "
            f"(<{MAX_LINEAR_FLUX_DENSITY_MT:.0f} mT). The core may saturate at full power.")))

    if design.max_freq_based_on_length < cfg.max_frequency:
        messages.append(ValidationMessage(type="warning", message=(
            f"Winding length limits the maximum frequency to {design.max_freq_based_on_length:.1f} MHz "
            f"(below the specified {cfg.max_frequency} MHz). Reduce turns or use a smaller core.")))

    if cfg.min_frequency < core.recommended_freq_range.min:
        messages.append(ValidationMessage(type="warning", message=(
            f"{core.id} is recommended above {core.recommended_freq_range.min} MHz. "
            f"Performance may be reduced at {cfg.min_frequency} MHz.")))

    if cfg.max_frequency > core.recommended_freq_range.max:
        messages.append(ValidationMessage(type="warning", message=(
            f"{core.id} is recommended below {core.recommended_freq_range.max} MHz. "
            f"Performance may be reduced at {cfg.max_frequency} MHz.")))

    if design.q_factor_at_min_freq > Q_WARNING_THRESHOLD:
        messages.append(ValidationMessage(type="warning", message=(
            f"High Q factor ({design.q_factor_at_min_freq:.1f}) at {cfg.min_frequency} MHz "
            f"may result in increased losses. Consider a lossier mix.")))

    if not any(m.type in ("error", "warning") for m in messages):
        messages.append(ValidationMessage(type="info", message=(
            "Design meets all requirements across the specified frequency range.")))

    zc = design.characteristic_impedance
    far_from_standard = all(abs(zc - z) > CHARACTERISTIC_IMPEDANCE_TOLERANCE
                            for z in STANDARD_CHARACTERISTIC_IMPEDANCES)
    if far_from_standard and not cfg.use_hybrid_design:
        messages.append(ValidationMessage(type="info", message=(
            f"Characteristic impedance {zc:.1f} ohm is far from 50/100 ohm line impedance; "
            f"a hybrid design (1:1 balun + unun) may perform better.")))

    messages.sort(key=lambda m: _SEVERITY_ORDER[m.type])
    return ValidationResult(valid=not any(m.type == "error" for m in messages), messages=messages)
