from fastapi import APIRouter, Depends

from care_api.auth import require_user
from care_api.container import ServiceContainer
from care_api.dependencies import get_container
from care_api.schemas.auth import CurrentUserResponse, LoginRequest, RegisterRequest
from care_api.security.tokens import TokenClaims

router = APIRouter()


@router.post("/register", status_code=201)
async def register(body: RegisterRequest, container: ServiceContainer = Depends(get_container)):
    result = await container.auth.register(body.email, body.password, name=body.name)
    return {
        "message": "User registered successfully",
        "user": result.user,
        "token": result.token,
    }


@router.post("/login")
async def login(body: LoginRequest, container: ServiceContainer = Depends(get_container)):
    result = await container.auth.login(body.email, body.password)
    return {
        "success": True,
        "user": result.user,
        "token": result.token,
    }


@router.get("/me", response_model=CurrentUserResponse)
async def me(current_user: TokenClaims = Depends(require_user)):
    """Identity carried by the presented token."""
    return CurrentUserResponse(
        id=current_user.user_id,
        email=current_user.email,
        role=current_user.role,
        is_admin=current_user.is_admin,
        expires_at=current_user.expires_at,
    )
