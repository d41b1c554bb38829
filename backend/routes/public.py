"""Public routes: root and band tables."""
from fastapi import APIRouter, Depends, HTTPException

from services.catalog import build_reference_data
from models import ReferenceData

router = APIRouter()


@router.get("/")
async def root():
    return {"message": "Balun & Choke Designer API"}


@router.get("/bands")
async def get_bands(data: ReferenceData = Depends(build_reference_data)):
    return list(data.ham_bands)


@router.get("/bands/{region}")
async def get_region_bands(region: str, data: ReferenceData = Depends(build_reference_data)):
    bands = data.region_bands.get(region)
    if bands is None:
        raise HTTPException(status_code=404, detail=f"Unknown IARU region: {region}")
    return bands
