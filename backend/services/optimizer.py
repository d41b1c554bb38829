"""Turns search: minimum turns meeting the rule of four, extended while over the loss limit."""
import logging
from typing import Dict, Optional, Sequence

from config import RULE_OF_FOUR_FACTOR, MAX_SEARCH_TURNS, MAX_EXTRA_LOSS_TURNS, FALLBACK_TURNS
from models import FerriteCore, DesignConfig, PermeabilityPoint
from services.core_model import calculate_impedance, calculate_losses, max_permissible_core_loss

logger = logging.getLogger(__name__)


def minimum_turns_for_reactance(core: FerriteCore, config: DesignConfig,
                                permeability: Sequence[PermeabilityPoint]) -> Optional[int]:
    """Smallest N whose reactance at min_frequency reaches 4 x input impedance, None if no N does."""
    target = RULE_OF_FOUR_FACTOR * config.input_impedance
    for turns in range(1, MAX_SEARCH_TURNS + 1):
        imp = calculate_impedance(core, turns, config.min_frequency, config.core_count, permeability)
        if imp.reactance >= target:
            return turns
    return None


def optimize_turns(core: FerriteCore, config: DesignConfig,
                   permeability: Sequence[PermeabilityPoint],
                   duty_cycle_factors: Dict[str, float]) -> int:
    base_turns = minimum_turns_for_reactance(core, config, permeability)
    if base_turns is None:
        logger.info(f"{core.id}: no turn count up to {MAX_SEARCH_TURNS} reaches "
                    f"{RULE_OF_FOUR_FACTOR * config.input_impedance:.0f} ohm at {config.min_frequency} MHz, "
                    f"falling back to {FALLBACK_TURNS}")
        return FALLBACK_TURNS

    limit = max_permissible_core_loss(core, config.core_count, config.operation_mode, duty_cycle_factors)
    for turns in range(base_turns, base_turns + MAX_EXTRA_LOSS_TURNS + 1):
        losses = calculate_losses(core, turns, config.min_frequency, config.core_count,
                                  config.power, config.input_impedance, permeability)
        if losses.power_loss <= limit:
            return turns

    logger.info(f"{core.id}: core loss stays above {limit:.2f} W within +{MAX_EXTRA_LOSS_TURNS} turns, "
                f"keeping {base_turns} turns")
    return base_turns
