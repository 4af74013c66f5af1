# -*- coding: utf-8 -*-
"""
Arquivo principal da aplicação FastAPI para o sistema administrativo da ONG Vida Plena.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import create_first_user
from vida_plena.config import Config
from vida_plena.database import Base, engine
from vida_plena.erros import ErroDominio

# Registra todos os modelos no metadata antes do create_all
from vida_plena.models import (  # noqa: F401
    audit_log, beneficiario, evento, evolucao_evento, fonte_recurso, foto_evento, gasto_evento, inscricao, usuario
)

from vida_plena.routes import (
    auditoria_fastapi, auth_fastapi, beneficiarios_fastapi, dashboard_fastapi, eventos_fastapi,
    inscricoes_fastapi, tempo_real_fastapi, usuarios_fastapi
)


logging.basicConfig(
    level=Config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    filename=Config.LOG_FILE
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    logger.info("Tabelas verificadas/criadas com sucesso")
    create_first_user.create_first_user()
    yield


env = Config.ENVIRONMENT

# Inicializa a aplicação FastAPI
app = FastAPI(
    title="API ONG Vida Plena",
    description="API para gestão de eventos, recursos e beneficiários da ONG Vida Plena",
    version="1.0.0",
    docs_url="/docs" if env != "production" else None,
    redoc_url="/redoc" if env != "production" else None,
    openapi_url="/openapi.json" if env != "production" else None,
    lifespan=lifespan,
)


origins = [
    Config.FRONTEND_URL,
    "http://localhost:5173",
    "http://localhost",
    "http://127.0.0.1",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ErroDominio)
async def erro_dominio_handler(request: Request, exc: ErroDominio):
    if exc.status_code >= 500:
        logger.error("%s %s: %s", request.method, request.url.path, exc.mensagem)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.mensagem})


# Montagem dos routers
app.include_router(auth_fastapi.router, prefix="/api/v1/auth")
app.include_router(usuarios_fastapi.router, prefix="/api/v1/usuarios")
app.include_router(eventos_fastapi.router, prefix="/api/v1/eventos")
app.include_router(beneficiarios_fastapi.router, prefix="/api/v1/beneficiarios")
app.include_router(inscricoes_fastapi.router, prefix="/api/v1/inscricoes")
app.include_router(dashboard_fastapi.router, prefix="/api/v1/dashboard")
app.include_router(auditoria_fastapi.router, prefix="/api/v1/auditoria")
app.include_router(tempo_real_fastapi.router, prefix="/api/v1/tempo-real")


@app.get("/", tags=["Root"])
async def root():
    return {
        "mensagem": "API ONG Vida Plena - Gestão Administrativa",
        "documentacao": "/docs",
        "endpoints": [
            {"eventos": "/api/v1/eventos"},
            {"beneficiarios": "/api/v1/beneficiarios"},
            {"inscricoes": "/api/v1/inscricoes"},
            {"dashboard": "/api/v1/dashboard/resumo"},
            {"auditoria": "/api/v1/auditoria"},
            {"tempo_real": "/api/v1/tempo-real/{topico}"},
        ]
    }
