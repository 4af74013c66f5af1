# -*- coding: utf-8 -*-
import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from vida_plena.auditoria import registrar_auditoria
from vida_plena.ciclo_vida import exigir_evento_aberto, exigir_evento_ativo, obter_evento
from vida_plena.enums import TipoAcao
from vida_plena.erros import ErroValidacao, RegistroNaoEncontrado
from vida_plena.models.beneficiario import Beneficiario
from vida_plena.models.inscricao import InscricaoEvento
from vida_plena.permissoes import Acao, Ator, exigir

logger = logging.getLogger(__name__)

MENSAGEM_DUPLICADA = "Este beneficiário já está inscrito neste evento."


def obter_beneficiario(db: Session, beneficiario_id: int) -> Beneficiario:
    beneficiario = db.query(Beneficiario).filter(Beneficiario.id == beneficiario_id).first()
    if beneficiario is None:
        raise RegistroNaoEncontrado("Beneficiário não encontrado")
    return beneficiario


def inscrever_beneficiario(db: Session, evento_id: int, beneficiario_id: int, ator: Ator) -> InscricaoEvento:
    """
    Inscreve o beneficiário no evento.

    A duplicidade é conferida antes da gravação e, de novo, pela restrição
    única (beneficiario_id, evento_id) do banco.
    """
    exigir(ator, Acao.INSCREVER_BENEFICIARIO)
    evento = obter_evento(db, evento_id)
    beneficiario = obter_beneficiario(db, beneficiario_id)
    exigir_evento_ativo(evento)

    existente = db.query(InscricaoEvento).filter(
        InscricaoEvento.evento_id == evento_id,
        InscricaoEvento.beneficiario_id == beneficiario_id,
    ).first()
    if existente:
        raise ErroValidacao(MENSAGEM_DUPLICADA)

    inscricao = InscricaoEvento(evento_id=evento_id, beneficiario_id=beneficiario_id)
    db.add(inscricao)
    registrar_auditoria(
        db, ator.identificacao, TipoAcao.INSCREVER,
        f"{beneficiario.nome_completo} em {evento.nome_evento}",
    )
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Inscrição duplicada barrada pelo banco: beneficiario=%s evento=%s", beneficiario_id, evento_id)
        raise ErroValidacao(MENSAGEM_DUPLICADA)

    db.refresh(inscricao)
    logger.info("Beneficiário %s inscrito no evento %s", beneficiario_id, evento_id)
    return inscricao


def listar_por_evento(db: Session, evento_id: int) -> List[InscricaoEvento]:
    obter_evento(db, evento_id)
    return (
        db.query(InscricaoEvento)
        .options(joinedload(InscricaoEvento.beneficiario))
        .filter(InscricaoEvento.evento_id == evento_id)
        .order_by(InscricaoEvento.data_inscricao.desc())
        .all()
    )


def listar_por_beneficiario(db: Session, beneficiario_id: int) -> List[InscricaoEvento]:
    obter_beneficiario(db, beneficiario_id)
    return (
        db.query(InscricaoEvento)
        .filter(InscricaoEvento.beneficiario_id == beneficiario_id)
        .order_by(InscricaoEvento.data_inscricao.desc())
        .all()
    )


def remover_inscricao(db: Session, inscricao_id: int, ator: Ator) -> None:
    exigir(ator, Acao.INSCREVER_BENEFICIARIO)
    inscricao = db.query(InscricaoEvento).filter(InscricaoEvento.id == inscricao_id).first()
    if inscricao is None:
        raise RegistroNaoEncontrado("Inscrição não encontrada")
    exigir_evento_aberto(obter_evento(db, inscricao.evento_id))

    db.delete(inscricao)
    db.commit()
