# -*- coding: utf-8 -*-
"""
Cadastro e edição de eventos.

Um evento nasce com pelo menos R$ 100,00 em fontes de recurso. As fontes de
origem Caixa são somadas e conferidas uma única vez contra o saldo global.
"""
import logging
from datetime import date, datetime, time
from typing import List, Optional

from sqlalchemy.orm import Session

from vida_plena.auditoria import registrar_auditoria
from vida_plena.ciclo_vida import exigir_evento_aberto, obter_evento
from vida_plena.encerramento import contar_fotos, contar_participantes
from vida_plena.enums import OrigemRecurso, StatusEvento, TipoAcao
from vida_plena.erros import ErroValidacao
from vida_plena.financeiro import dados_fonte, validar_fonte
from vida_plena.models.evento import Evento
from vida_plena.models.fonte_recurso import FonteRecurso
from vida_plena.permissoes import Acao, Ator, exigir
from vida_plena.saldo import recalcular_saldo_evento, total_gastos, verificar_saldo_caixa
from vida_plena.schemas.evento import EventoCreate, EventoDetalhe, EventoRead, EventoUpdate
from vida_plena.schemas.fonte_recurso import FonteRecursoCreate
from vida_plena.validadores import (
    validar_data_futura,
    validar_horario,
    validar_tamanho_minimo,
    validar_valor_minimo,
)

logger = logging.getLogger(__name__)

NOME_EVENTO_MINIMO = 10
VERBA_MINIMA_EVENTO = 100.0


def validar_agenda(data_inicio: date, horario_inicio: time, data_fim: date, horario_fim: time,
                   hoje: Optional[date] = None) -> None:
    if not validar_data_futura(data_inicio, hoje):
        raise ErroValidacao("A data de início deve ser a partir de amanhã.")
    if not validar_horario(horario_inicio) or not validar_horario(horario_fim):
        raise ErroValidacao("Horários devem estar entre 06:00 e 22:45, em intervalos de 15 minutos.")
    if datetime.combine(data_fim, horario_fim) <= datetime.combine(data_inicio, horario_inicio):
        raise ErroValidacao("O término deve ser posterior ao início.")


def validar_fontes_iniciais(db: Session, fontes: List[FonteRecursoCreate]) -> None:
    for fonte in fontes:
        validar_fonte(db, fonte, verificar_caixa=False)

    total = sum(f.valor for f in fontes)
    if not validar_valor_minimo(total, VERBA_MINIMA_EVENTO):
        raise ErroValidacao("Verba mínima de R$ 100,00 é necessária para criar o evento.")

    total_caixa = sum(f.valor for f in fontes if f.origem == OrigemRecurso.CAIXA)
    if total_caixa > 0:
        verificar_saldo_caixa(db, total_caixa)


def criar_evento(db: Session, dados: EventoCreate, ator: Ator, hoje: Optional[date] = None) -> Evento:
    exigir(ator, Acao.CRIAR_EVENTO)

    if not validar_tamanho_minimo(dados.nome_evento, NOME_EVENTO_MINIMO):
        raise ErroValidacao(f"Nome do evento deve ter no mínimo {NOME_EVENTO_MINIMO} caracteres.")
    data_fim = dados.data_fim or dados.data_inicio
    validar_agenda(dados.data_inicio, dados.horario_inicio, data_fim, dados.horario_fim, hoje)
    validar_fontes_iniciais(db, dados.fontes)

    evento = Evento(
        nome_evento=dados.nome_evento.strip(),
        tipo_evento=dados.tipo_evento.value,
        data_inicio=dados.data_inicio,
        horario_inicio=dados.horario_inicio,
        data_fim=data_fim,
        horario_fim=dados.horario_fim,
        status_evento=StatusEvento.ATIVO.value,
    )
    db.add(evento)
    db.flush()

    for fonte in dados.fontes:
        db.add(FonteRecurso(evento_id=evento.id, **dados_fonte(fonte)))

    registrar_auditoria(db, ator.identificacao, TipoAcao.CRIAR_EVENTO, f"Evento: {evento.nome_evento}")
    db.commit()
    recalcular_saldo_evento(db, evento.id)
    db.refresh(evento)

    logger.info("Evento %s criado por %s com verba de %.2f", evento.id, ator.identificacao, evento.verba_disponivel)
    return evento


def atualizar_evento(db: Session, evento_id: int, dados: EventoUpdate, ator: Ator, hoje: Optional[date] = None) -> Evento:
    exigir(ator, Acao.EDITAR_EVENTO)
    evento = obter_evento(db, evento_id)
    exigir_evento_aberto(evento)

    update_data = dados.model_dump(exclude_unset=True)
    if "tipo_evento" in update_data and update_data["tipo_evento"] is not None:
        update_data["tipo_evento"] = update_data["tipo_evento"].value

    # A agenda resultante é validada como um todo
    if any(k in update_data for k in ("data_inicio", "horario_inicio", "data_fim", "horario_fim")):
        validar_agenda(
            update_data.get("data_inicio") or evento.data_inicio,
            update_data.get("horario_inicio") or evento.horario_inicio,
            update_data.get("data_fim") or evento.data_fim,
            update_data.get("horario_fim") or evento.horario_fim,
            hoje,
        )

    for key, value in update_data.items():
        if value is not None:
            setattr(evento, key, value)

    db.commit()
    db.refresh(evento)
    return evento


def listar_eventos(db: Session, status: Optional[StatusEvento] = None, skip: int = 0, limit: int = 100) -> List[Evento]:
    query = db.query(Evento)
    if status is not None:
        query = query.filter(Evento.status_evento == status.value)
    return query.order_by(Evento.data_inicio.desc()).offset(skip).limit(limit).all()


def detalhar_evento(db: Session, evento_id: int) -> EventoDetalhe:
    """Recalcula o saldo antes de montar o detalhe (a tela de detalhe sempre confere os totais)."""
    recalcular_saldo_evento(db, evento_id)
    evento = obter_evento(db, evento_id)

    return EventoDetalhe(
        **EventoRead.model_validate(evento).model_dump(),
        total_gastos=total_gastos(db, evento_id),
        participantes=contar_participantes(db, evento_id),
        fotos=contar_fotos(db, evento_id),
    )
