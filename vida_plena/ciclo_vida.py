# -*- coding: utf-8 -*-
"""
Ciclo de vida do evento.

    Ativo    -> Suspenso, Cancelado, Encerrado
    Suspenso -> Ativo, Cancelado, Encerrado
    Cancelado e Encerrado são finais.

Uma tentativa recusada (transição fora da tabela, perfil sem permissão ou
justificativa curta) não altera o evento e não gera registro de auditoria.
"""
import logging
from typing import Dict, FrozenSet, Optional

from sqlalchemy.orm import Session

from vida_plena.auditoria import registrar_auditoria
from vida_plena.encerramento import verificar_encerramento
from vida_plena.enums import StatusEvento, TipoAcao
from vida_plena.erros import ErroValidacao, EstadoInvalido, RegistroNaoEncontrado, TransicaoInvalida
from vida_plena.models.evento import Evento
from vida_plena.permissoes import Acao, Ator, exigir
from vida_plena.validadores import validar_tamanho_minimo

logger = logging.getLogger(__name__)

JUSTIFICATIVA_SUSPENSAO_MINIMO = 60
JUSTIFICATIVA_CANCELAMENTO_MINIMO = 100

TRANSICOES: Dict[StatusEvento, FrozenSet[StatusEvento]] = {
    StatusEvento.ATIVO: frozenset({StatusEvento.SUSPENSO, StatusEvento.CANCELADO, StatusEvento.ENCERRADO}),
    StatusEvento.SUSPENSO: frozenset({StatusEvento.ATIVO, StatusEvento.CANCELADO, StatusEvento.ENCERRADO}),
    StatusEvento.CANCELADO: frozenset(),
    StatusEvento.ENCERRADO: frozenset(),
}


def obter_evento(db: Session, evento_id: int) -> Evento:
    evento = db.query(Evento).filter(Evento.id == evento_id).first()
    if evento is None:
        raise RegistroNaoEncontrado("Evento não encontrado")
    return evento


def status_de(evento: Evento) -> StatusEvento:
    return StatusEvento(evento.status_evento)


def pode_transitar(origem: StatusEvento, destino: StatusEvento) -> bool:
    return destino in TRANSICOES[origem]


def exigir_transicao(evento: Evento, destino: StatusEvento) -> None:
    origem = status_de(evento)
    if not pode_transitar(origem, destino):
        raise TransicaoInvalida(f"Não é possível passar o evento de {origem.value} para {destino.value}.")


def exigir_evento_aberto(evento: Evento) -> None:
    """Evento encerrado não aceita novos registros (recursos, gastos, fotos...)."""
    if status_de(evento) == StatusEvento.ENCERRADO:
        raise EstadoInvalido("Evento encerrado não aceita alterações.")


def exigir_evento_ativo(evento: Evento) -> None:
    if status_de(evento) != StatusEvento.ATIVO:
        raise EstadoInvalido(f"O evento está {evento.status_evento} e não aceita inscrições.")


def _aplicar_transicao(db: Session, evento: Evento, destino: StatusEvento, ator: Ator,
                       tipo_acao: TipoAcao, justificativa: Optional[str] = None) -> Evento:
    origem = evento.status_evento
    evento.status_evento = destino.value
    registrar_auditoria(db, ator.identificacao, tipo_acao, justificativa)
    db.commit()
    db.refresh(evento)
    logger.info("Evento %s: %s -> %s (%s)", evento.id, origem, destino.value, ator.identificacao)
    return evento


def suspender_evento(db: Session, evento_id: int, ator: Ator, justificativa: Optional[str]) -> Evento:
    evento = obter_evento(db, evento_id)
    exigir_transicao(evento, StatusEvento.SUSPENSO)
    exigir(ator, Acao.SUSPENDER_EVENTO)
    if not validar_tamanho_minimo(justificativa, JUSTIFICATIVA_SUSPENSAO_MINIMO):
        raise ErroValidacao(f"Justificativa curta (mínimo {JUSTIFICATIVA_SUSPENSAO_MINIMO} caracteres).")

    evento.justificativa_suspensao = justificativa
    return _aplicar_transicao(db, evento, StatusEvento.SUSPENSO, ator, TipoAcao.SUSPENDER, justificativa)


def reativar_evento(db: Session, evento_id: int, ator: Ator) -> Evento:
    evento = obter_evento(db, evento_id)
    exigir_transicao(evento, StatusEvento.ATIVO)
    exigir(ator, Acao.REATIVAR_EVENTO)
    return _aplicar_transicao(db, evento, StatusEvento.ATIVO, ator, TipoAcao.REATIVAR)


def cancelar_evento(db: Session, evento_id: int, ator: Ator, justificativa: Optional[str]) -> Evento:
    evento = obter_evento(db, evento_id)
    exigir_transicao(evento, StatusEvento.CANCELADO)
    exigir(ator, Acao.CANCELAR_EVENTO)
    if not validar_tamanho_minimo(justificativa, JUSTIFICATIVA_CANCELAMENTO_MINIMO):
        raise ErroValidacao(f"Justificativa curta (mínimo {JUSTIFICATIVA_CANCELAMENTO_MINIMO} caracteres).")

    evento.justificativa_cancelamento = justificativa
    return _aplicar_transicao(db, evento, StatusEvento.CANCELADO, ator, TipoAcao.CANCELAR, justificativa)


def encerrar_evento(db: Session, evento_id: int, ator: Ator, resumo: Optional[str]) -> Evento:
    evento = obter_evento(db, evento_id)
    exigir_transicao(evento, StatusEvento.ENCERRADO)

    resultado = verificar_encerramento(db, evento, resumo, ator)
    resultado.exigir_apto()

    evento.publico_alcancado = resultado.participantes
    evento.resumo_fechamento = resumo
    return _aplicar_transicao(db, evento, StatusEvento.ENCERRADO, ator, TipoAcao.ENCERRAR)
