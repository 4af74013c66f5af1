# vida_plena/routes/dashboard_fastapi.py

from collections import defaultdict
from datetime import datetime, timedelta

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from vida_plena.auth import requer
from vida_plena.database import get_db
from vida_plena.enums import StatusEvento
from vida_plena.models.beneficiario import Beneficiario
from vida_plena.models.evento import Evento
from vida_plena.models.inscricao import InscricaoEvento
from vida_plena.permissoes import Acao
from vida_plena.saldo import saldo_global_disponivel
from vida_plena.schemas.dashboard import ResumoDashboard, ResumoEvento, SaldoCaixa

router = APIRouter(
    tags=["Dashboard"],
    dependencies=[Depends(requer(Acao.CONSULTAR_OPERACIONAL))]
)


@router.get("/resumo", response_model=ResumoDashboard)
def get_resumo(db: Session = Depends(get_db)):
    """
    Indicadores gerais. Receita e saldo vêm dos valores já calculados em cada
    evento; a despesa é a diferença entre os dois.
    """
    eventos = db.query(Evento).order_by(Evento.data_inicio.desc()).all()
    total_beneficiarios = db.query(func.count(Beneficiario.id)).scalar() or 0

    participantes_por_evento = dict(
        db.query(InscricaoEvento.evento_id, func.count(InscricaoEvento.id))
        .group_by(InscricaoEvento.evento_id)
        .all()
    )

    eventos_por_status = {s.value: 0 for s in StatusEvento}
    resumo_eventos = []
    for evento in eventos:
        eventos_por_status[evento.status_evento] = eventos_por_status.get(evento.status_evento, 0) + 1

        receita = evento.verba_disponivel or 0.0
        saldo = evento.saldo_atual or 0.0
        participantes = participantes_por_evento.get(evento.id, 0)
        percentual = (participantes / total_beneficiarios * 100) if total_beneficiarios > 0 else 0.0

        resumo_eventos.append(ResumoEvento(
            id=evento.id,
            nome_evento=evento.nome_evento,
            status_evento=evento.status_evento,
            receita=receita,
            despesa=receita - saldo,
            saldo=saldo,
            participantes=participantes,
            percentual_beneficiarios=round(percentual, 1),
        ))

    receita_total = sum(e.receita for e in resumo_eventos)
    saldo_total = sum(e.saldo for e in resumo_eventos)

    return ResumoDashboard(
        total_eventos=len(eventos),
        total_beneficiarios=total_beneficiarios,
        receita_total=receita_total,
        despesa_total=receita_total - saldo_total,
        saldo_total=saldo_total,
        eventos_por_status=eventos_por_status,
        eventos=resumo_eventos,
    )


@router.get("/atividades-recentes")
def get_atividades_recentes(db: Session = Depends(get_db)):
    """
    Retorna o número de novos beneficiários e eventos nos últimos 6 meses.
    """
    hoje = datetime.utcnow()
    seis_meses_atras = hoje - timedelta(days=180)

    beneficiarios_por_mes = defaultdict(int)
    eventos_por_mes = defaultdict(int)

    beneficiarios = db.query(Beneficiario.data_cadastramento).filter(Beneficiario.data_cadastramento >= seis_meses_atras).all()
    for beneficiario in beneficiarios:
        # Ex: "Jan/24"
        chave_mes = beneficiario.data_cadastramento.strftime("%b/%y")
        beneficiarios_por_mes[chave_mes] += 1

    eventos = db.query(Evento.data_criacao).filter(Evento.data_criacao >= seis_meses_atras).all()
    for evento in eventos:
        chave_mes = evento.data_criacao.strftime("%b/%y")
        eventos_por_mes[chave_mes] += 1

    labels = [(hoje - timedelta(days=30 * i)).strftime("%b/%y") for i in range(5, -1, -1)]

    return {
        "labels": labels,
        "datasets": {
            "beneficiarios": [beneficiarios_por_mes.get(label, 0) for label in labels],
            "eventos": [eventos_por_mes.get(label, 0) for label in labels],
        }
    }


@router.get("/caixa", response_model=SaldoCaixa)
def get_saldo_caixa(db: Session = Depends(get_db)):
    return SaldoCaixa(saldo_disponivel=saldo_global_disponivel(db))
