"""Complex permeability lookup for ferrite mixes."""
import logging
from typing import Sequence, Tuple

from models import PermeabilityPoint

logger = logging.getLogger(__name__)


def interpolate_permeability(points: Sequence[PermeabilityPoint], frequency_mhz: float,
                             initial_permeability: float = 0.0) -> Tuple[float, float]:
    """Return (mu', mu'') at frequency_mhz, linearly interpolated and clamped to the table.

    An empty table falls back to (mu_i, 0.1 * mu_i) so the design can still proceed.
    """
    if not points:
        logger.warning(f"No permeability data, falling back to initial permeability {initial_permeability}")
        return initial_permeability, 0.1 * initial_permeability

    table = sorted(points, key=lambda p: p.frequency)
    if frequency_mhz <= table[0].frequency:
        return table[0].mu_prime, table[0].mu_double_prime
    if frequency_mhz >= table[-1].frequency:
        return table[-1].mu_prime, table[-1].mu_double_prime

    for lower, upper in zip(table, table[1:]):
        if frequency_mhz == lower.frequency:
            return lower.mu_prime, lower.mu_double_prime
        if lower.frequency <= frequency_mhz < upper.frequency:
            ratio = (frequency_mhz - lower.frequency) / (upper.frequency - lower.frequency)
            mu_prime = lower.mu_prime + ratio * (upper.mu_prime - lower.mu_prime)
            mu_double_prime = lower.mu_double_prime + ratio * (upper.mu_double_prime - lower.mu_double_prime)
            return mu_prime, mu_double_prime

    # unreachable for a sorted table with f strictly inside its range
    return table[-1].mu_prime, table[-1].mu_double_prime
