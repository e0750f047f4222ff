"""
accounts-api/app.py
Point d'entrée principal de l'API de gestion des comptes
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import Config
from api.endpoints import router as api_router
from domain.exceptions import (
    AccountServiceError, ValidationError, NotFoundError, AuthError,
    AuthorizationError, PersistenceError, PersistenceTimeoutError,
    WorkflowCancelledError
)
from infrastructure.database.init_db import init_db
from logging_config import setup_logging, setup_colored_logging

# Initialiser la configuration
config = Config()

# Configurer le logging
if config.log_colored:
    logger = setup_colored_logging(
        log_level=config.log_level,
        log_file=config.log_file_path if config.log_file_enabled else None
    )
else:
    logger = setup_logging(
        log_level=config.log_level,
        log_file=config.log_file_path if config.log_file_enabled else None
    )

# Ordre important : les sous-classes avant PersistenceError
ERROR_STATUS_CODES = [
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (AuthError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (PersistenceTimeoutError, status.HTTP_504_GATEWAY_TIMEOUT),
    (WorkflowCancelledError, status.HTTP_409_CONFLICT),
    (PersistenceError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def status_code_for(error: AccountServiceError) -> int:
    """Code HTTP correspondant à une erreur du domaine"""
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- Startup ---
    logger.info(f"🚀 Démarrage de {config.app_name}")
    init_db()

    yield

    # --- Shutdown ---
    logger.info(f"🛑 Arrêt de {config.app_name}")

# Créer l'application FastAPI
app = FastAPI(
    title="Accounts API",
    description="API de gestion des comptes utilisateurs et des organisations",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AccountServiceError)
async def account_service_error_handler(request: Request, exc: AccountServiceError):
    """Réponse structurée pour toute erreur du domaine"""
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error(f"❌ {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


# Inclure les routes API
app.include_router(api_router, prefix="/api")

@app.get("/", tags=["Root"])
def root():
    """Page d'accueil de l'API"""
    return {
        "service": config.app_name,
        "version": "1.0.0",
        "status": "operational",
        "documentation": "/docs"
    }

@app.get("/health", tags=["System"])
def health_check():
    """Endpoint de santé pour les orchestrateurs (Kubernetes, Docker, etc.)"""
    return {
        "status": "healthy",
        "service": config.app_name
    }

if __name__ == "__main__":
    import uvicorn
    from logging_config import get_uvicorn_log_config

    log_config = get_uvicorn_log_config(log_level=config.log_level)

    uvicorn.run(
        "app:app",
        host=config.host,
        port=config.port,
        log_config=log_config
    )
