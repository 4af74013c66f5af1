# -*- coding: utf-8 -*-
"""
Lançamento de fontes de recurso (Doação / Caixa) e de gastos dos eventos.

Toda inclusão, alteração ou exclusão é seguida de recalcular_saldo_evento.
"""
import logging

from sqlalchemy.orm import Session

from vida_plena.ciclo_vida import exigir_evento_aberto, obter_evento
from vida_plena.enums import OrigemRecurso
from vida_plena.erros import ErroValidacao, RegistroNaoEncontrado
from vida_plena.models.fonte_recurso import FonteRecurso
from vida_plena.models.gasto_evento import GastoEvento
from vida_plena.permissoes import Acao, Ator, exigir
from vida_plena.saldo import recalcular_saldo_evento, verificar_saldo_caixa
from vida_plena.schemas.fonte_recurso import FonteRecursoCreate
from vida_plena.schemas.gasto_evento import GastoEventoCreate
from vida_plena.validadores import (
    validar_cpf_ou_cnpj,
    validar_tamanho_minimo,
    validar_valor_positivo,
)

logger = logging.getLogger(__name__)

JUSTIFICATIVA_CAIXA_MINIMO = 100
DESCRICAO_GASTO_MINIMO = 10
COMPROVANTE_MINIMO = 5


# --- FONTES DE RECURSO ---

def validar_fonte(db: Session, fonte: FonteRecursoCreate, verificar_caixa: bool = True) -> None:
    if not validar_valor_positivo(fonte.valor):
        raise ErroValidacao("Valor deve ser maior que zero.")

    if fonte.origem == OrigemRecurso.CAIXA:
        if not validar_tamanho_minimo(fonte.justificativa_uso, JUSTIFICATIVA_CAIXA_MINIMO):
            raise ErroValidacao(f"Justificativa de uso do Caixa deve ter no mínimo {JUSTIFICATIVA_CAIXA_MINIMO} caracteres.")
        if verificar_caixa:
            verificar_saldo_caixa(db, fonte.valor)
    else:
        if not fonte.doador_nome or not fonte.doador_documento:
            raise ErroValidacao("Nome e Documento do doador são obrigatórios.")
        if not validar_cpf_ou_cnpj(fonte.doador_documento):
            raise ErroValidacao("CPF ou CNPJ do doador inválido.")
        if fonte.forma_pagamento is None:
            raise ErroValidacao("Informe a forma de pagamento da doação.")


def dados_fonte(fonte: FonteRecursoCreate) -> dict:
    """Campos a gravar: cada origem guarda apenas os seus campos."""
    if fonte.origem == OrigemRecurso.CAIXA:
        return {
            "origem": fonte.origem.value,
            "valor": fonte.valor,
            "doador_nome": None,
            "doador_documento": None,
            "forma_pagamento": None,
            "justificativa_uso": fonte.justificativa_uso,
        }
    return {
        "origem": fonte.origem.value,
        "valor": fonte.valor,
        "doador_nome": fonte.doador_nome,
        "doador_documento": fonte.doador_documento,
        "forma_pagamento": fonte.forma_pagamento.value,
        "justificativa_uso": None,
    }


def _obter_fonte(db: Session, fonte_id: int) -> FonteRecurso:
    fonte = db.query(FonteRecurso).filter(FonteRecurso.id == fonte_id).first()
    if fonte is None:
        raise RegistroNaoEncontrado("Fonte de recurso não encontrada")
    return fonte


def adicionar_fonte(db: Session, evento_id: int, fonte: FonteRecursoCreate, ator: Ator) -> FonteRecurso:
    exigir(ator, Acao.LANCAR_RECURSO)
    evento = obter_evento(db, evento_id)
    exigir_evento_aberto(evento)
    validar_fonte(db, fonte)

    db_fonte = FonteRecurso(evento_id=evento_id, **dados_fonte(fonte))
    db.add(db_fonte)
    db.commit()
    recalcular_saldo_evento(db, evento_id)
    db.refresh(db_fonte)
    logger.info("Recurso %s de %.2f adicionado ao evento %s", db_fonte.origem, db_fonte.valor, evento_id)
    return db_fonte


def atualizar_fonte(db: Session, fonte_id: int, fonte: FonteRecursoCreate, ator: Ator) -> FonteRecurso:
    exigir(ator, Acao.LANCAR_RECURSO)
    db_fonte = _obter_fonte(db, fonte_id)
    exigir_evento_aberto(obter_evento(db, db_fonte.evento_id))
    validar_fonte(db, fonte, verificar_caixa=False)
    if fonte.origem == OrigemRecurso.CAIXA:
        verificar_saldo_caixa(db, fonte.valor, desconsiderar=db_fonte.valor)

    for key, value in dados_fonte(fonte).items():
        setattr(db_fonte, key, value)
    db.commit()
    recalcular_saldo_evento(db, db_fonte.evento_id)
    db.refresh(db_fonte)
    return db_fonte


def remover_fonte(db: Session, fonte_id: int, ator: Ator) -> None:
    exigir(ator, Acao.LANCAR_RECURSO)
    db_fonte = _obter_fonte(db, fonte_id)
    evento_id = db_fonte.evento_id
    exigir_evento_aberto(obter_evento(db, evento_id))

    db.delete(db_fonte)
    db.commit()
    recalcular_saldo_evento(db, evento_id)


# --- GASTOS ---

def validar_gasto(gasto: GastoEventoCreate) -> None:
    if not validar_tamanho_minimo(gasto.descricao_gasto, DESCRICAO_GASTO_MINIMO):
        raise ErroValidacao(f"Descrição deve ter no mínimo {DESCRICAO_GASTO_MINIMO} caracteres.")
    if not validar_valor_positivo(gasto.valor_gasto):
        raise ErroValidacao("Valor deve ser maior que zero.")
    if not gasto.fornecedor_nome or not gasto.fornecedor_documento:
        raise ErroValidacao("Fornecedor incompleto.")
    if not validar_cpf_ou_cnpj(gasto.fornecedor_documento):
        raise ErroValidacao("Documento do fornecedor inválido.")
    if not validar_tamanho_minimo(gasto.s3_link_comprovante, COMPROVANTE_MINIMO):
        raise ErroValidacao("Comprovante é obrigatório.")


def _obter_gasto(db: Session, gasto_id: int) -> GastoEvento:
    gasto = db.query(GastoEvento).filter(GastoEvento.id == gasto_id).first()
    if gasto is None:
        raise RegistroNaoEncontrado("Despesa não encontrada")
    return gasto


def adicionar_gasto(db: Session, evento_id: int, gasto: GastoEventoCreate, ator: Ator) -> GastoEvento:
    exigir(ator, Acao.LANCAR_GASTO)
    evento = obter_evento(db, evento_id)
    exigir_evento_aberto(evento)
    validar_gasto(gasto)

    db_gasto = GastoEvento(evento_id=evento_id, **gasto.model_dump())
    db.add(db_gasto)
    db.commit()
    recalcular_saldo_evento(db, evento_id)
    db.refresh(db_gasto)
    logger.info("Despesa de %.2f lançada no evento %s", db_gasto.valor_gasto, evento_id)
    return db_gasto


def atualizar_gasto(db: Session, gasto_id: int, gasto: GastoEventoCreate, ator: Ator) -> GastoEvento:
    exigir(ator, Acao.LANCAR_GASTO)
    db_gasto = _obter_gasto(db, gasto_id)
    exigir_evento_aberto(obter_evento(db, db_gasto.evento_id))
    validar_gasto(gasto)

    for key, value in gasto.model_dump().items():
        setattr(db_gasto, key, value)
    db.commit()
    recalcular_saldo_evento(db, db_gasto.evento_id)
    db.refresh(db_gasto)
    return db_gasto


def remover_gasto(db: Session, gasto_id: int, ator: Ator) -> None:
    exigir(ator, Acao.LANCAR_GASTO)
    db_gasto = _obter_gasto(db, gasto_id)
    evento_id = db_gasto.evento_id
    exigir_evento_aberto(obter_evento(db, evento_id))

    db.delete(db_gasto)
    db.commit()
    recalcular_saldo_evento(db, evento_id)
