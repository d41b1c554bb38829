"""Typed, immutable reference data built from the raw config tables."""
import logging
from functools import lru_cache

from config import (
    CORE_MODELS, PERMEABILITY_DATA, WIRE_DATA, HAM_BANDS, IARU_REGION_BANDS,
    COAX_CABLES, PRESET_CONFIGS, DUTY_CYCLE_FACTORS,
    DEFAULT_CORE_ID, HIGH_POWER_CORE_ID, HIGH_POWER_THRESHOLD_W,
)
from models import (
    FerriteCore, PermeabilityPoint, WireSpec, HamBand, CoaxCable,
    DesignConfig, PresetConfig, ReferenceData,
)

logger = logging.getLogger(__name__)

_PRESET_META_KEYS = ("name", "suggested_core_model", "suggested_core_count")


def _build_preset(raw: dict) -> PresetConfig:
    config_fields = {k: v for k, v in raw.items() if k not in _PRESET_META_KEYS}
    return PresetConfig(
        name=raw["name"],
        config=DesignConfig(**config_fields),
        suggested_core_model=raw["suggested_core_model"],
        suggested_core_count=raw.get("suggested_core_count", 1),
    )


@lru_cache(maxsize=1)
def build_reference_data() -> ReferenceData:
    """Assemble the reference bundle once; callers share the same frozen instance."""
    cores = tuple(FerriteCore(**c) for c in CORE_MODELS)
    permeability = {
        mix: tuple(PermeabilityPoint(frequency=f, mu_prime=mp, mu_double_prime=mpp)
                   for f, mp, mpp in points)
        for mix, points in PERMEABILITY_DATA.items()
    }
    wires = tuple(
        WireSpec(gauge=g, diameter=w["diameter"], area=w["area"], current_capacity=w["current"])
        for g, w in sorted(WIRE_DATA.items())
    )
    region_bands = {
        region: {key: HamBand(**band) for key, band in bands.items()}
        for region, bands in IARU_REGION_BANDS.items()
    }
    data = ReferenceData(
        cores=cores,
        permeability=permeability,
        wires=wires,
        ham_bands=tuple(HamBand(**b) for b in HAM_BANDS),
        region_bands=region_bands,
        coax_cables={cid: CoaxCable(id=cid, **c) for cid, c in COAX_CABLES.items()},
        presets=tuple(_build_preset(p) for p in PRESET_CONFIGS),
        duty_cycle_factors=dict(DUTY_CYCLE_FACTORS),
    )
    logger.info(f"Reference data loaded: {len(cores)} cores, {len(permeability)} mixes, {len(wires)} wire gauges")
    return data


def find_core(data: ReferenceData, core_id: str) -> FerriteCore:
    for core in data.cores:
        if core.id.lower() == core_id.lower():
            return core
    raise KeyError(f"Unknown core model: {core_id}")


def find_coax(data: ReferenceData, coax_type: str) -> CoaxCable:
    cable = data.coax_cables.get(coax_type.lower())
    if cable is None:
        raise KeyError(f"Unknown coax type: {coax_type}")
    return cable


def find_region_band(data: ReferenceData, region: str, band_name: str) -> HamBand:
    """Look up a band in an IARU region by name ("40m") or centre key ("7.150")."""
    bands = data.region_bands.get(region)
    if bands is None:
        raise KeyError(f"Unknown IARU region: {region}")
    if band_name in bands:
        return bands[band_name]
    for band in bands.values():
        if band.name == band_name:
            return band
    raise KeyError(f"Band {band_name} not defined for {region}")


def default_core_for_power(data: ReferenceData, power: float) -> FerriteCore:
    """Larger toroid above the high-power threshold, the standard one otherwise."""
    core_id = HIGH_POWER_CORE_ID if power > HIGH_POWER_THRESHOLD_W else DEFAULT_CORE_ID
    return find_core(data, core_id)
