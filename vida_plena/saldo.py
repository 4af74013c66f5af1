# -*- coding: utf-8 -*-
"""
Saldo dos eventos e saldo global (Caixa da ONG).

`verba_disponivel` e `saldo_atual` do Evento são um cache derivado das fontes
de recurso e dos gastos. A fonte da verdade são as somas das linhas filhas;
recalcular_saldo_evento é o único lugar que escreve esses dois campos.

Não há lock nem transação entre leitura e escrita: duas sessões recalculando o
mesmo evento ao mesmo tempo resultam no valor do último recálculo. Da mesma
forma, verificar_saldo_caixa lê o saldo global e decide; duas alocações de
Caixa simultâneas podem passar ambas na verificação.
"""
import logging
from typing import Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from vida_plena.erros import RegistroNaoEncontrado, SaldoCaixaInsuficiente
from vida_plena.models.evento import Evento
from vida_plena.models.fonte_recurso import FonteRecurso
from vida_plena.models.gasto_evento import GastoEvento

logger = logging.getLogger(__name__)


def total_fontes(db: Session, evento_id: int) -> float:
    return db.query(func.sum(FonteRecurso.valor)).filter(FonteRecurso.evento_id == evento_id).scalar() or 0.0


def total_gastos(db: Session, evento_id: int) -> float:
    return db.query(func.sum(GastoEvento.valor_gasto)).filter(GastoEvento.evento_id == evento_id).scalar() or 0.0


def recalcular_saldo_evento(db: Session, evento_id: int) -> Tuple[float, float]:
    """
    Soma as fontes e os gastos do evento e grava verba_disponivel e saldo_atual.
    Deve ser chamada depois de qualquer inclusão, alteração ou exclusão de
    FonteRecurso ou GastoEvento (já commitadas).
    """
    evento = db.query(Evento).filter(Evento.id == evento_id).first()
    if evento is None:
        raise RegistroNaoEncontrado("Evento não encontrado")

    verba = total_fontes(db, evento_id)
    gastos = total_gastos(db, evento_id)

    evento.verba_disponivel = verba
    evento.saldo_atual = verba - gastos
    db.commit()

    logger.info("Saldo recalculado do evento %s: verba=%.2f gastos=%.2f saldo=%.2f",
                evento_id, verba, gastos, evento.saldo_atual)
    return evento.verba_disponivel, evento.saldo_atual


def saldo_global_disponivel(db: Session) -> float:
    """Saldo da ONG: soma de saldo_atual de todos os eventos."""
    return db.query(func.sum(Evento.saldo_atual)).scalar() or 0.0


def verificar_saldo_caixa(db: Session, valor: float, desconsiderar: float = 0.0) -> float:
    """
    Bloqueia uso do Caixa acima do saldo global. Retorna o saldo lido.

    `desconsiderar` é o valor atual de uma fonte em alteração: ele já está
    somado ao saldo global e sai da conta antes da comparação.
    """
    disponivel = saldo_global_disponivel(db) - desconsiderar
    if valor > disponivel:
        logger.warning("Uso do Caixa recusado: solicitado=%.2f disponivel=%.2f", valor, disponivel)
        raise SaldoCaixaInsuficiente(disponivel=disponivel, solicitado=valor)
    return disponivel
