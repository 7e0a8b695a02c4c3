from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException, Query

from camera_resolver.dependencies import get_catalog
from camera_resolver.services.resolution_catalog import ResolutionCatalog

router = APIRouter()

@router.get("/labels", summary="List aspect-ratio labels", response_model=List[str])
def get_labels(catalog: ResolutionCatalog = Depends(get_catalog)):
    return catalog.labels()


@router.get("/resolutions", summary="Canonical resolutions for one aspect-ratio label", response_model=List[str])
def get_resolutions(
    label: str = Query(..., description="예: '16x9 Landscape (16:9)'"),
    catalog: ResolutionCatalog = Depends(get_catalog),
):
    if not catalog.has_label(label):
        raise HTTPException(status_code=404, detail=f"Unknown aspect ratio label '{label}'.")
    return [str(r) for r in catalog.resolutions_for(label)]


@router.get("/", summary="Full catalog", response_model=Dict[str, List[str]])
def get_catalog_table(catalog: ResolutionCatalog = Depends(get_catalog)):
    return catalog.as_dict()
