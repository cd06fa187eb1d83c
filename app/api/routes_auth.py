from fastapi import APIRouter, Depends

from app.api.deps import get_current_user, get_identity
from app.core.exceptions import NotFoundError
from app.schemas.user import CurrentUser, LoginRequest, RegisterRequest, TokenResponse, UserResponse, VerifyResponse
from app.services.identity import IdentityProvider

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(data: RegisterRequest, identity: IdentityProvider = Depends(get_identity)):
    user = await identity.register(data)
    return TokenResponse(
        message="User registered successfully",
        token=identity.issue_token(user),
        user=CurrentUser.model_validate(user),
    )


@router.post("/login", response_model=TokenResponse)
async def login(data: LoginRequest, identity: IdentityProvider = Depends(get_identity)):
    user = await identity.authenticate(data.username, data.password)
    return TokenResponse(
        message="Login successful",
        token=identity.issue_token(user),
        user=CurrentUser.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
async def me(current_user: CurrentUser = Depends(get_current_user),
             identity: IdentityProvider = Depends(get_identity)):
    user = await identity.get_user(current_user.id)
    if user is None:
        raise NotFoundError("User not found")
    return user


@router.get("/verify", response_model=VerifyResponse)
async def verify(current_user: CurrentUser = Depends(get_current_user)):
    return VerifyResponse(valid=True, user=current_user)
