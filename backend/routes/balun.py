"""Balun/unun design, validation, topology, hybrid and sweep routes."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from models import (
    BalunDesignRequest, BalunDesignResponse, ValidationResult, WindingTopology,
    WindingTopologyRequest, HybridDesignResult, BandPowerRequest, BandPowerPoint, SwrPoint,
    FerriteCore, PresetConfig, WireSpec, ReferenceData,
)
from services.balun import (
    design_balun, compute_design, compose_hybrid, calculate_band_power_data, calculate_swr_curve,
)
from services.catalog import build_reference_data, find_core, default_core_for_power
from services.topology import determine_winding_style
from services.validator import validate_design

router = APIRouter(prefix="/balun")


def _core_or_404(data: ReferenceData, core_id: Optional[str], power: float) -> FerriteCore:
    try:
        if core_id is None:
            return default_core_for_power(data, power)
        return find_core(data, core_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=e.args[0])


@router.get("/cores", response_model=List[FerriteCore])
async def list_cores(data: ReferenceData = Depends(build_reference_data)):
    return list(data.cores)


@router.get("/presets", response_model=List[PresetConfig])
async def list_presets(data: ReferenceData = Depends(build_reference_data)):
    return list(data.presets)


@router.get("/wires", response_model=List[WireSpec])
async def list_wires(data: ReferenceData = Depends(build_reference_data)):
    return list(data.wires)


@router.post("/design", response_model=BalunDesignResponse)
async def design(request: BalunDesignRequest, data: ReferenceData = Depends(build_reference_data)):
    """Full design; primary_turns == 0 lets the optimiser pick turns, min frequency and core count."""
    core = _core_or_404(data, request.core_id, request.config.power)
    try:
        result = design_balun(core, request.config, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return BalunDesignResponse(design=result, validation=validate_design(result))


@router.post("/validate", response_model=ValidationResult)
async def validate(request: BalunDesignRequest, data: ReferenceData = Depends(build_reference_data)):
    core = _core_or_404(data, request.core_id, request.config.power)
    try:
        result = compute_design(core, request.config, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return validate_design(result)


@router.post("/winding-topology", response_model=WindingTopology)
async def winding_topology(request: WindingTopologyRequest):
    return determine_winding_style(request.input_impedance, request.output_impedance,
                                   request.use_hybrid_design, request.winding_type)


@router.post("/hybrid", response_model=HybridDesignResult)
async def hybrid(request: BalunDesignRequest, data: ReferenceData = Depends(build_reference_data)):
    core = _core_or_404(data, request.core_id, request.config.power)
    try:
        return compose_hybrid(core, request.config, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/band-power", response_model=List[BandPowerPoint])
async def band_power(request: BandPowerRequest, data: ReferenceData = Depends(build_reference_data)):
    core = _core_or_404(data, request.core_id, request.power)
    return calculate_band_power_data(core, request.turns, request.core_count, request.power,
                                     request.input_impedance, data)


@router.post("/swr-curve", response_model=List[SwrPoint])
async def swr_curve(request: BandPowerRequest, data: ReferenceData = Depends(build_reference_data)):
    core = _core_or_404(data, request.core_id, request.power)
    return calculate_swr_curve(core, request.turns, request.core_count, request.power,
                               request.input_impedance, data)
