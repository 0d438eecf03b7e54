"""
API Dependencies.
Dependências comuns: sessão do banco e operador autenticado.
"""

import logging
from typing import Annotated
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.security import decode_access_token
from app.models.user import User


logger = logging.getLogger(__name__)

# Esquema Bearer Token
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Recupera o operador a partir do token JWT.
    
    Raises:
        HTTPException: Se o token for inválido ou o usuário não existir
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Token de autenticação inválido ou expirado",
        headers={"WWW-Authenticate": "Bearer"},
    )
    
    if not credentials:
        logger.warning("Tentativa de acesso sem token")
        raise credentials_exception
    
    token_data = decode_access_token(credentials.credentials)
    
    if token_data is None:
        logger.warning("Token inválido ou expirado")
        raise credentials_exception
    
    user = await db.get(User, token_data.user_id)
    
    if user is None:
        logger.warning(f"Usuário {token_data.user_id} não encontrado")
        raise credentials_exception
    
    logger.debug(f"Operador autenticado: {user.email}")
    return user


async def get_current_active_user(
    current_user: User = Depends(get_current_user),
) -> User:
    """
    Recupera o operador autenticado e ativo.
    
    Raises:
        HTTPException: Se a conta estiver desativada
    """
    if not current_user.is_active:
        logger.warning(f"Conta desativada: {current_user.email}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Conta desativada",
        )
    return current_user


# Type aliases for cleaner route signatures
CurrentUser = Annotated[User, Depends(get_current_active_user)]
DbSession = Annotated[AsyncSession, Depends(get_db)]
