"""Pytest configuration: in-memory SQLite database, FastAPI TestClient and fakes for the collaborators."""

import os
from datetime import date, time, timedelta
from typing import Generator

# Override env BEFORE importing app modules so Config picks up test values.
os.environ.update(
    {
        "DATABASE_URL": "sqlite:///:memory:",
        "ENVIRONMENT": "test",
        "SECRET_KEY": "test-secret-key",
        "WEBHOOK_URL_BENEFICIARIO": "",
        "WEBHOOK_URL_EVENTO": "",
        "S3_BUCKET_NAME": "test-bucket",
        "PUBLIC_BUCKET_URL": "",
    }
)

import httpx  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from main import app  # noqa: E402
from vida_plena.armazenamento import ArmazenamentoS3, get_armazenamento  # noqa: E402
from vida_plena.auth import create_access_token, get_password_hash  # noqa: E402
from vida_plena.database import Base, get_db  # noqa: E402
from vida_plena.enums import FormaPagamento, OrigemRecurso, StatusEvento, TipoEvento  # noqa: E402
from vida_plena.models.beneficiario import Beneficiario  # noqa: E402
from vida_plena.models.evento import Evento  # noqa: E402
from vida_plena.models.fonte_recurso import FonteRecurso  # noqa: E402
from vida_plena.models.foto_evento import FotoEvento  # noqa: E402
from vida_plena.models.inscricao import InscricaoEvento  # noqa: E402
from vida_plena.models.usuario import Usuario  # noqa: E402
from vida_plena.notificacoes import NotificationService, get_notification_service  # noqa: E402
from vida_plena.permissoes import Ator, Perfil  # noqa: E402
from vida_plena.saldo import recalcular_saldo_evento  # noqa: E402

CPF_VALIDO = "52998224725"
CNPJ_VALIDO = "11222333000181"
RESUMO_VALIDO = "Evento realizado com a participação da comunidade, distribuição de kits e atendimento de saúde para todas as famílias."

# ── In-memory SQLite engine ────────────────────────────────────────

_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

_TestSession = sessionmaker(bind=_engine, autoflush=False)


class FakeS3Client:
    """Stands in for the boto3 S3 client: keeps uploaded objects in memory."""

    def __init__(self):
        self.objetos = {}

    def upload_fileobj(self, fileobj, bucket, key, ExtraArgs=None):
        self.objetos[key] = (fileobj.read(), (ExtraArgs or {}).get("ContentType"))

    def generate_presigned_url(self, operation, Params=None, ExpiresIn=None):
        return f"https://storage.test/{Params['Bucket']}/{Params['Key']}?expires={ExpiresIn}"

    def delete_object(self, Bucket, Key):
        self.objetos.pop(Key, None)


@pytest.fixture(autouse=True)
def _create_tables():
    """Create all tables before each test and drop after."""
    Base.metadata.create_all(bind=_engine)
    yield
    Base.metadata.drop_all(bind=_engine)


@pytest.fixture()
def db() -> Generator[Session, None, None]:
    session = _TestSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def s3_fake() -> FakeS3Client:
    return FakeS3Client()


@pytest.fixture()
def webhooks():
    """Requests received by the fake webhook endpoint."""
    return []


@pytest.fixture()
def notificador(webhooks) -> NotificationService:
    def handler(request: httpx.Request) -> httpx.Response:
        webhooks.append(request)
        return httpx.Response(200, text="Accepted")

    return NotificationService(
        url_beneficiario="https://hook.test/beneficiario",
        url_evento="https://hook.test/evento",
        transport=httpx.MockTransport(handler),
    )


@pytest.fixture()
def client(db: Session, s3_fake, notificador) -> Generator[TestClient, None, None]:
    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_armazenamento] = lambda: ArmazenamentoS3(client=s3_fake, bucket="test-bucket")
    app.dependency_overrides[get_notification_service] = lambda: notificador

    yield TestClient(app)

    app.dependency_overrides.clear()


# ── Users and authorization ────────────────────────────────────────

def _criar_usuario(db: Session, email: str, perfil: Perfil) -> Usuario:
    usuario = Usuario(email=email, nome=email.split("@")[0], hashed_password=get_password_hash("senha123"), perfil=perfil.value)
    db.add(usuario)
    db.commit()
    return usuario


def _headers(email: str) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': email})}"}


@pytest.fixture()
def admin_headers(db):
    _criar_usuario(db, "admin@vidaplena.org", Perfil.ADMINISTRADOR)
    return _headers("admin@vidaplena.org")


@pytest.fixture()
def operador_headers(db):
    _criar_usuario(db, "operador@vidaplena.org", Perfil.OPERADOR)
    return _headers("operador@vidaplena.org")


@pytest.fixture()
def gerente_headers(db):
    _criar_usuario(db, "gerente@vidaplena.org", Perfil.GERENCIADOR)
    return _headers("gerente@vidaplena.org")


@pytest.fixture()
def admin() -> Ator:
    return Ator("admin@vidaplena.org", Perfil.ADMINISTRADOR)


@pytest.fixture()
def operador() -> Ator:
    return Ator("operador@vidaplena.org", Perfil.OPERADOR)


@pytest.fixture()
def gerente() -> Ator:
    return Ator("gerente@vidaplena.org", Perfil.GERENCIADOR)


# ── Factories ──────────────────────────────────────────────────────

@pytest.fixture()
def evento_factory(db: Session):
    """Insere um evento direto no banco (sem as validações de criação)."""

    def _criar(nome="Campanha de Vacinação", status=StatusEvento.ATIVO, verba=500.0, origem=OrigemRecurso.DOACAO):
        inicio = date.today() + timedelta(days=7)
        evento = Evento(
            nome_evento=nome,
            tipo_evento=TipoEvento.CAMPANHA_SAUDE.value,
            data_inicio=inicio,
            horario_inicio=time(9, 0),
            data_fim=inicio,
            horario_fim=time(17, 0),
            status_evento=status.value,
        )
        db.add(evento)
        db.flush()
        if verba:
            db.add(FonteRecurso(
                evento_id=evento.id,
                origem=origem.value,
                valor=verba,
                doador_nome="Padaria Central",
                doador_documento=CNPJ_VALIDO,
                forma_pagamento=FormaPagamento.PIX.value,
            ))
        db.commit()
        recalcular_saldo_evento(db, evento.id)
        db.refresh(evento)
        return evento

    return _criar


@pytest.fixture()
def beneficiario_factory(db: Session):
    contador = {"n": 0}

    def _criar(nome="Maria da Silva"):
        contador["n"] += 1
        beneficiario = Beneficiario(
            nome_completo=f"{nome} {contador['n']}",
            documento_identidade=str(1000000 + contador["n"]),
            email=f"pessoa{contador['n']}@exemplo.org",
            data_nascimento=date(1980, 5, 17),
        )
        db.add(beneficiario)
        db.commit()
        db.refresh(beneficiario)
        return beneficiario

    return _criar


@pytest.fixture()
def evento_pronto_para_encerrar(db, evento_factory, beneficiario_factory):
    """Evento ativo com 5 inscritos e 2 fotos."""
    evento = evento_factory()
    for _ in range(5):
        beneficiario = beneficiario_factory()
        db.add(InscricaoEvento(evento_id=evento.id, beneficiario_id=beneficiario.id))
    for i in range(2):
        db.add(FotoEvento(evento_id=evento.id, s3_link_foto=f"eventos/{evento.id}/fotos/{i}.jpg"))
    db.commit()
    return evento
