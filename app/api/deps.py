from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.exceptions import ForbiddenError, UnauthorizedError
from app.db.core import Database
from app.schemas.user import CurrentUser
from app.services.catalog import CatalogStore
from app.services.identity import IdentityProvider
from app.services.reveal_clock import RevealClock
from app.services.vote_ledger import VoteLedger

bearer_scheme = HTTPBearer(auto_error=False)


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_catalog(request: Request) -> CatalogStore:
    return request.app.state.catalog


def get_vote_ledger(request: Request) -> VoteLedger:
    return request.app.state.vote_ledger


def get_identity(request: Request) -> IdentityProvider:
    return request.app.state.identity


def get_reveal_clock(request: Request) -> RevealClock:
    return request.app.state.reveal_clock


async def get_optional_user(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
        identity: IdentityProvider = Depends(get_identity)) -> Optional[CurrentUser]:
    token = credentials.credentials if credentials else None
    return await identity.current_user(token)


async def get_current_user(user: Optional[CurrentUser] = Depends(get_optional_user)) -> CurrentUser:
    if user is None:
        raise UnauthorizedError("Access token required")
    return user


async def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not user.is_admin:
        raise ForbiddenError("Admin access required")
    return user
