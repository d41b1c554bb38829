"""Coax choke (helical inductor) routes."""
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from models import (
    InductorParameters, InductorResult, FrequencyResponseRequest, FrequencyResponseOutput,
    CoaxCable, ReferenceData,
)
from services.catalog import build_reference_data, find_coax
from services.inductor import calculate_inductor, frequency_response, resolve_frequency

router = APIRouter(prefix="/inductor")


@router.get("/coax-cables", response_model=List[CoaxCable])
async def list_coax_cables(data: ReferenceData = Depends(build_reference_data)):
    return list(data.coax_cables.values())


@router.post("/calculate", response_model=InductorResult)
async def calculate(params: InductorParameters, data: ReferenceData = Depends(build_reference_data)):
    try:
        cable = find_coax(data, params.coax_type)
        frequency = resolve_frequency(params, data)
        return calculate_inductor(params, cable, frequency)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=e.args[0])
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/frequency-response", response_model=FrequencyResponseOutput)
async def sweep(request: FrequencyResponseRequest, data: ReferenceData = Depends(build_reference_data)):
    try:
        cable = find_coax(data, request.parameters.coax_type)
        srf_mhz, points = frequency_response(request.parameters, cable, request.start_mhz,
                                             request.stop_mhz, request.num_points)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=e.args[0])
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return FrequencyResponseOutput(self_resonant_freq_mhz=srf_mhz, points=points)
