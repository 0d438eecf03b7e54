"""
Operator account endpoints.
"""

from fastapi import APIRouter, status

from app.api.deps import DbSession, CurrentUser
from app.schemas.auth import AccessToken, LoginRequest, RegisterRequest
from app.schemas.user import UserResponse
from app.services.auth import AuthService


router = APIRouter()


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Cadastrar operador",
)
async def register_operator(data: RegisterRequest, db: DbSession) -> UserResponse:
    operator = await AuthService(db).register(data)
    return UserResponse.model_validate(operator)


@router.post(
    "/login",
    response_model=AccessToken,
    summary="Login do operador",
    description="Troca email e senha por um token Bearer",
)
async def login_operator(data: LoginRequest, db: DbSession) -> AccessToken:
    return await AuthService(db).login(data)


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Operador autenticado",
)
async def read_current_operator(current_user: CurrentUser) -> UserResponse:
    return UserResponse.model_validate(current_user)
