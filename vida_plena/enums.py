# -*- coding: utf-8 -*-
"""
Conjuntos fechados de valores usados pelos modelos e schemas.
Os valores são gravados como texto no banco.
"""
import enum


class StatusEvento(str, enum.Enum):
    ATIVO = "Ativo"
    SUSPENSO = "Suspenso"
    CANCELADO = "Cancelado"
    ENCERRADO = "Encerrado"


class TipoEvento(str, enum.Enum):
    CAMPANHA_SAUDE = "Campanha de Saude"
    COMUNIDADE = "Comunidade"
    DIVERSAO = "Diversao"
    NATAL = "Natal"


class OrigemRecurso(str, enum.Enum):
    DOACAO = "Doacao"
    CAIXA = "Caixa"


class FormaPagamento(str, enum.Enum):
    PIX = "PIX"
    TRANSFERENCIA = "Transferencia"
    DEBITO = "Debito"
    DINHEIRO = "Dinheiro"


class TipoAcao(str, enum.Enum):
    CRIAR_EVENTO = "CriarEvento"
    SUSPENDER = "Suspender"
    REATIVAR = "Reativar"
    CANCELAR = "Cancelar"
    ENCERRAR = "EncerrarEvento"
    INSCREVER = "InscreverBeneficiario"
