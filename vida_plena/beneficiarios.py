# -*- coding: utf-8 -*-
import logging
from typing import Optional

from sqlalchemy.orm import Session

from vida_plena.erros import ErroValidacao
from vida_plena.inscricoes import obter_beneficiario
from vida_plena.models.beneficiario import Beneficiario
from vida_plena.permissoes import Acao, Ator, exigir
from vida_plena.schemas.beneficiario import BeneficiarioCreate, BeneficiarioUpdate
from vida_plena.validadores import (
    somente_digitos,
    validar_documento_identidade,
    validar_nome_completo,
    validar_whatsapp,
)

logger = logging.getLogger(__name__)


def validar_beneficiario(db: Session, nome: str, documento: str, whatsapp: Optional[str],
                         ignorar_id: Optional[int] = None) -> None:
    if not validar_nome_completo(nome):
        raise ErroValidacao("Informe nome e sobrenome.")
    if not validar_documento_identidade(documento):
        raise ErroValidacao("Documento de identidade inválido.")
    if whatsapp and not validar_whatsapp(whatsapp):
        raise ErroValidacao("WhatsApp inválido. Use DDD + 9 dígitos.")

    query = db.query(Beneficiario).filter(Beneficiario.documento_identidade == somente_digitos(documento))
    if ignorar_id is not None:
        query = query.filter(Beneficiario.id != ignorar_id)
    if query.first():
        raise ErroValidacao("Já existe um beneficiário com este documento.")


def cadastrar_beneficiario(db: Session, dados: BeneficiarioCreate, ator: Ator) -> Beneficiario:
    exigir(ator, Acao.CADASTRAR_BENEFICIARIO)
    validar_beneficiario(db, dados.nome_completo, dados.documento_identidade, dados.whatsapp)

    beneficiario = Beneficiario(
        nome_completo=dados.nome_completo.strip(),
        documento_identidade=somente_digitos(dados.documento_identidade),
        whatsapp=somente_digitos(dados.whatsapp) or None,
        email=dados.email,
        data_nascimento=dados.data_nascimento,
    )
    db.add(beneficiario)
    db.commit()
    db.refresh(beneficiario)
    logger.info("Beneficiário %s cadastrado por %s", beneficiario.id, ator.identificacao)
    return beneficiario


def atualizar_beneficiario(db: Session, beneficiario_id: int, dados: BeneficiarioUpdate, ator: Ator) -> Beneficiario:
    exigir(ator, Acao.CADASTRAR_BENEFICIARIO)
    beneficiario = obter_beneficiario(db, beneficiario_id)

    update_data = dados.model_dump(exclude_unset=True)
    for obrigatorio in ("nome_completo", "documento_identidade", "data_nascimento"):
        if update_data.get(obrigatorio) is None:
            update_data.pop(obrigatorio, None)
    nome = update_data.get("nome_completo") or beneficiario.nome_completo
    documento = update_data.get("documento_identidade") or beneficiario.documento_identidade
    whatsapp = update_data.get("whatsapp", beneficiario.whatsapp)
    validar_beneficiario(db, nome, documento, whatsapp, ignorar_id=beneficiario_id)

    if "documento_identidade" in update_data and update_data["documento_identidade"]:
        update_data["documento_identidade"] = somente_digitos(update_data["documento_identidade"])
    if update_data.get("whatsapp"):
        update_data["whatsapp"] = somente_digitos(update_data["whatsapp"])

    for key, value in update_data.items():
        setattr(beneficiario, key, value)

    db.commit()
    db.refresh(beneficiario)
    return beneficiario
