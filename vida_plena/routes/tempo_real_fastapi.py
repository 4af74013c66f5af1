# vida_plena/routes/tempo_real_fastapi.py
import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from vida_plena.auth import requer
from vida_plena.canal import Assinatura, canal
from vida_plena.database import get_db
from vida_plena.erros import RegistroNaoEncontrado
from vida_plena.models.beneficiario import Beneficiario
from vida_plena.models.evento import Evento
from vida_plena.models.inscricao import InscricaoEvento
from vida_plena.permissoes import Acao
from vida_plena.schemas.beneficiario import BeneficiarioRead
from vida_plena.schemas.evento import EventoRead
from vida_plena.schemas.inscricao import InscricaoBase

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Tempo Real"],
    dependencies=[Depends(requer(Acao.CONSULTAR_OPERACIONAL))]
)

INTERVALO_KEEPALIVE = 15.0


def _snapshot_eventos(db: Session):
    eventos = db.query(Evento).order_by(Evento.data_inicio.desc()).all()
    return [EventoRead.model_validate(e).model_dump(mode="json") for e in eventos]


def _snapshot_beneficiarios(db: Session):
    beneficiarios = db.query(Beneficiario).order_by(Beneficiario.nome_completo).all()
    return [BeneficiarioRead.model_validate(b).model_dump(mode="json") for b in beneficiarios]


def _snapshot_inscricoes(db: Session):
    inscricoes = db.query(InscricaoEvento).order_by(InscricaoEvento.id).all()
    return [
        {**InscricaoBase.model_validate(i, from_attributes=True).model_dump(), "id": i.id}
        for i in inscricoes
    ]


canal.registrar_topico(Evento.__tablename__, _snapshot_eventos)
canal.registrar_topico(Beneficiario.__tablename__, _snapshot_beneficiarios)
canal.registrar_topico(InscricaoEvento.__tablename__, _snapshot_inscricoes)


def formatar_sse(snapshot) -> str:
    return f"event: snapshot\ndata: {json.dumps(snapshot)}\n\n"


async def _eventos_sse(request: Request, assinatura: Assinatura):
    try:
        while not await request.is_disconnected():
            snapshot = await run_in_threadpool(assinatura.proximo, INTERVALO_KEEPALIVE)
            if snapshot is None:
                yield ": keep-alive\n\n"
                continue
            yield formatar_sse(snapshot)
    finally:
        assinatura.cancelar()
        logger.debug("Assinatura do tópico %s encerrada", assinatura.topico)


@router.get("/{topico}")
async def stream_topico(topico: str, request: Request, db: Session = Depends(get_db)):
    """
    Stream (server-sent events) com o resultado completo do tópico a cada
    alteração. O primeiro evento é o snapshot atual.
    """
    if topico not in canal.topicos:
        raise RegistroNaoEncontrado(f"Tópico desconhecido: {topico}")

    assinatura = canal.abrir_assinatura(db, topico)
    return StreamingResponse(
        _eventos_sse(request, assinatura),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"},
    )
