from typing import List
from fastapi import APIRouter, Depends, Path, Query

from app.api.deps import get_catalog, require_admin
from app.schemas.catalog import CandidateCreate, CandidateResponse, CandidateUpdate
from app.schemas.common import MAX_DB_ID
from app.schemas.vote import MessageResponse
from app.services.catalog import CatalogStore

router = APIRouter(prefix="/candidates", tags=["candidates"])


@router.get("", response_model=List[CandidateResponse])
async def list_candidates(nomination_id: int = Query(..., gt=0, le=MAX_DB_ID),
                          catalog: CatalogStore = Depends(get_catalog)):
    return await catalog.list_candidates(nomination_id)


@router.get("/{candidate_id}", response_model=CandidateResponse)
async def get_candidate(candidate_id: int = Path(gt=0, le=MAX_DB_ID),
                        catalog: CatalogStore = Depends(get_catalog)):
    return await catalog.get_candidate(candidate_id)


@router.post("", response_model=CandidateResponse, status_code=201,
             dependencies=[Depends(require_admin)])
async def create_candidate(data: CandidateCreate, catalog: CatalogStore = Depends(get_catalog)):
    return await catalog.create_candidate(data)


@router.put("/{candidate_id}", response_model=CandidateResponse,
            dependencies=[Depends(require_admin)])
async def update_candidate(data: CandidateUpdate,
                           candidate_id: int = Path(gt=0, le=MAX_DB_ID),
                           catalog: CatalogStore = Depends(get_catalog)):
    return await catalog.update_candidate(candidate_id, data)


@router.delete("/{candidate_id}", response_model=MessageResponse,
               dependencies=[Depends(require_admin)])
async def delete_candidate(candidate_id: int = Path(gt=0, le=MAX_DB_ID),
                           catalog: CatalogStore = Depends(get_catalog)):
    await catalog.delete_candidate(candidate_id)
    return MessageResponse(message="Candidate deleted successfully")
