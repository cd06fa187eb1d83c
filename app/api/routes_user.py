from typing import List
from fastapi import APIRouter, Depends, Path

from app.api.deps import get_current_user, get_identity, require_admin
from app.schemas.common import MAX_DB_ID
from app.schemas.user import CurrentUser, UserResponse
from app.services.identity import IdentityProvider

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=List[UserResponse], dependencies=[Depends(require_admin)])
async def list_users(identity: IdentityProvider = Depends(get_identity)):
    """All users, newest first."""
    return await identity.list_users()


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int = Path(gt=0, le=MAX_DB_ID),
                   current_user: CurrentUser = Depends(get_current_user),
                   identity: IdentityProvider = Depends(get_identity)):
    return await identity.get_profile(user_id, current_user)
