from typing import List
from fastapi import APIRouter, Depends, Path

from app.api.deps import get_catalog, require_admin
from app.schemas.catalog import NominationCreate, NominationResponse, NominationUpdate
from app.schemas.common import MAX_DB_ID
from app.schemas.vote import MessageResponse
from app.services.catalog import CatalogStore

router = APIRouter(prefix="/nominations", tags=["nominations"])


@router.get("", response_model=List[NominationResponse])
async def list_nominations(catalog: CatalogStore = Depends(get_catalog)):
    """Active nominations, newest first."""
    return await catalog.list_nominations()


@router.get("/{nomination_id}", response_model=NominationResponse)
async def get_nomination(nomination_id: int = Path(gt=0, le=MAX_DB_ID),
                         catalog: CatalogStore = Depends(get_catalog)):
    return await catalog.get_nomination(nomination_id)


@router.post("", response_model=NominationResponse, status_code=201,
             dependencies=[Depends(require_admin)])
async def create_nomination(data: NominationCreate, catalog: CatalogStore = Depends(get_catalog)):
    return await catalog.create_nomination(data)


@router.put("/{nomination_id}", response_model=NominationResponse,
            dependencies=[Depends(require_admin)])
async def update_nomination(data: NominationUpdate,
                            nomination_id: int = Path(gt=0, le=MAX_DB_ID),
                            catalog: CatalogStore = Depends(get_catalog)):
    return await catalog.update_nomination(nomination_id, data)


@router.delete("/{nomination_id}", response_model=MessageResponse,
               dependencies=[Depends(require_admin)])
async def delete_nomination(nomination_id: int = Path(gt=0, le=MAX_DB_ID),
                            catalog: CatalogStore = Depends(get_catalog)):
    await catalog.deactivate_nomination(nomination_id)
    return MessageResponse(message="Nomination deleted successfully")
