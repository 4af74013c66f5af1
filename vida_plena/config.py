# -*- coding: utf-8 -*-
"""
Configuração da aplicação lida de variáveis de ambiente (ou do arquivo .env).
"""
import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    ENVIRONMENT = os.environ.get("ENVIRONMENT", "development")

    # Banco de dados
    DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./vida_plena.db")

    # Segurança
    SECRET_KEY = os.environ.get("SECRET_KEY") or "dev-secret-key-change-in-production"
    ALGORITHM = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 8))

    FRONTEND_URL = os.environ.get("FRONTEND_URL", "http://localhost:5173")

    # Logs
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    LOG_FILE = os.environ.get("LOG_FILE")  # None = console

    # Automações (Make/Zapier)
    WEBHOOK_URL_BENEFICIARIO = os.environ.get("WEBHOOK_URL_BENEFICIARIO")
    WEBHOOK_URL_EVENTO = os.environ.get("WEBHOOK_URL_EVENTO")
    NOTIFICACAO_TIMEOUT = float(os.environ.get("NOTIFICACAO_TIMEOUT", 10))

    # Armazenamento S3 / R2
    S3_ENDPOINT_URL = os.environ.get("S3_ENDPOINT_URL")
    AWS_ACCESS_KEY_ID = os.environ.get("AWS_ACCESS_KEY_ID")
    AWS_SECRET_ACCESS_KEY = os.environ.get("AWS_SECRET_ACCESS_KEY")
    S3_BUCKET_NAME = os.environ.get("S3_BUCKET_NAME")
    PUBLIC_BUCKET_URL = os.environ.get("PUBLIC_BUCKET_URL")
    URL_ASSINADA_EXPIRA_SEGUNDOS = 3600
