"""
PDV Pagamentos API - Main Application Entry Point
Pagamentos mistos para pedidos de ponto de venda.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from app.core.config import settings
from app.core.database import init_db, close_db
from app.api.v1.router import api_router


logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info(f"Iniciando {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Ambiente: {settings.ENVIRONMENT}")
    
    # Create tables directly in development; migrations handle the rest
    if settings.is_development:
        await init_db()
    
    yield
    
    logger.info("Encerrando...")
    await close_db()


app = FastAPI(
    title=settings.APP_NAME,
    description="""
## PDV Pagamentos API

Um pedido pode ser quitado com vários pagamentos parciais de formas diferentes.

* **Autenticação** - Cadastro, login, tokens JWT
* **Pedidos** - Criação e consulta de pedidos
* **Pagamentos** - Dinheiro, PIX, cartão de crédito, cartão de débito e voucher
* **Situação** - Total pago, saldo restante e pedido quitado
    """,
    version=settings.APP_VERSION,
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    openapi_url="/openapi.json" if settings.is_development else None,
    lifespan=lifespan,
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Flatten validation errors into field/message pairs."""
    errors = []
    for error in exc.errors():
        field = " -> ".join(str(loc) for loc in error["loc"])
        errors.append({
            "field": field,
            "message": error["msg"],
            "type": error["type"],
        })
    
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": "Erro de validação dos dados",
            "errors": errors,
        },
    )


app.include_router(api_router, prefix="/api/v1")


@app.get(
    "/health",
    tags=["Saúde"],
    summary="Verificação do servidor",
)
async def health_check():
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
    }


@app.get(
    "/",
    tags=["Info"],
    summary="Informações da API",
)
async def root():
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "description": "Pagamentos mistos para pedidos de ponto de venda",
        "docs": "/docs" if settings.is_development else "Disabled in production",
        "health": "/health",
    }


if __name__ == "__main__":
    import os
    import uvicorn
    
    port = int(os.getenv("PORT", "8000"))
    
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=port,
        reload=settings.is_development,
    )
