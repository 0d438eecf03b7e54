"""
Operator accounts: registration and password login.
"""

import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from fastapi import HTTPException, status

from app.models.user import User
from app.schemas.auth import RegisterRequest, LoginRequest, AccessToken
from app.core.security import (
    get_password_hash,
    verify_password,
    create_access_token,
)

logger = logging.getLogger(__name__)


class AuthService:
    """Creates operators and exchanges credentials for access tokens."""
    
    def __init__(self, db: AsyncSession):
        self.db = db
    
    async def _find_operator(self, email: str) -> User | None:
        result = await self.db.execute(
            select(User).where(User.email == email)
        )
        return result.scalar_one_or_none()
    
    async def register(self, data: RegisterRequest) -> User:
        """
        Create an operator account.
        
        Raises:
            HTTPException: 400 when the email is already taken
        """
        if await self._find_operator(data.email) is not None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Já existe uma conta com este email",
            )
        
        operator = User(
            email=data.email,
            hashed_password=get_password_hash(data.password),
            full_name=data.full_name,
            store_name=data.store_name,
        )
        self.db.add(operator)
        await self.db.flush()
        await self.db.refresh(operator)
        
        logger.info(f"Operador {operator.email} cadastrado")
        return operator
    
    async def login(self, data: LoginRequest) -> AccessToken:
        """
        Check credentials and issue an access token.
        
        Raises:
            HTTPException: 401 on bad credentials, 403 on a disabled account
        """
        operator = await self._find_operator(data.email)
        
        if operator is None or not verify_password(data.password, operator.hashed_password):
            logger.warning(f"Falha de login para {data.email}")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Email ou senha incorretos",
            )
        
        if not operator.is_active:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Conta desativada",
            )
        
        return AccessToken(access_token=create_access_token(operator.id, operator.email))
