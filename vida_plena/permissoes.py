# -*- coding: utf-8 -*-
"""
Perfis de acesso (RBAC) e a matriz de ações permitidas para cada perfil.

O perfil vem do token do usuário; este módulo apenas autoriza, nunca autentica.
"""
import enum
from typing import FrozenSet, NamedTuple

from vida_plena.erros import AcessoNegado


class Perfil(str, enum.Enum):
    GERENCIADOR = "Gerenciador"
    ADMINISTRADOR = "Administrador"
    OPERADOR = "Operador"


class Acao(enum.Enum):
    GERENCIAR_USUARIOS = "gerenciar_usuarios"
    CRIAR_EVENTO = "criar_evento"
    EDITAR_EVENTO = "editar_evento"
    SUSPENDER_EVENTO = "suspender_evento"
    REATIVAR_EVENTO = "reativar_evento"
    CANCELAR_EVENTO = "cancelar_evento"
    ENCERRAR_EVENTO = "encerrar_evento"
    LANCAR_RECURSO = "lancar_recurso"
    LANCAR_GASTO = "lancar_gasto"
    GERENCIAR_FOTOS = "gerenciar_fotos"
    INSCREVER_BENEFICIARIO = "inscrever_beneficiario"
    CADASTRAR_BENEFICIARIO = "cadastrar_beneficiario"
    REGISTRAR_EVOLUCAO = "registrar_evolucao"
    CONSULTAR_OPERACIONAL = "consultar_operacional"  # eventos, dashboard, auditoria


class Ator(NamedTuple):
    """Quem executa a operação: identificação (e-mail) e perfil."""
    identificacao: str
    perfil: Perfil


_COMUNS_OPERACIONAIS = frozenset({
    Acao.SUSPENDER_EVENTO,
    Acao.REATIVAR_EVENTO,
    Acao.INSCREVER_BENEFICIARIO,
    Acao.CADASTRAR_BENEFICIARIO,
    Acao.REGISTRAR_EVOLUCAO,
    Acao.CONSULTAR_OPERACIONAL,
})


def acoes_permitidas(perfil: Perfil) -> FrozenSet[Acao]:
    match perfil:
        case Perfil.GERENCIADOR:
            # Gestão de acessos apenas, sem dados operacionais
            return frozenset({Acao.GERENCIAR_USUARIOS})
        case Perfil.ADMINISTRADOR:
            return _COMUNS_OPERACIONAIS | {
                Acao.CRIAR_EVENTO,
                Acao.EDITAR_EVENTO,
                Acao.CANCELAR_EVENTO,
                Acao.ENCERRAR_EVENTO,
            }
        case Perfil.OPERADOR:
            return _COMUNS_OPERACIONAIS | {
                Acao.LANCAR_RECURSO,
                Acao.LANCAR_GASTO,
                Acao.GERENCIAR_FOTOS,
            }
    raise ValueError(f"Perfil desconhecido: {perfil!r}")


def pode(perfil: Perfil, acao: Acao) -> bool:
    return acao in acoes_permitidas(perfil)


MENSAGENS_ACESSO = {
    Acao.GERENCIAR_USUARIOS: "Acesso restrito a Gerenciadores.",
    Acao.CRIAR_EVENTO: "Apenas Administradores podem criar eventos.",
    Acao.EDITAR_EVENTO: "Apenas Administradores podem alterar eventos.",
    Acao.CANCELAR_EVENTO: "Apenas Administradores podem cancelar.",
    Acao.ENCERRAR_EVENTO: "Apenas Administradores podem encerrar eventos.",
    Acao.LANCAR_RECURSO: "Apenas Operadores lançam recursos.",
    Acao.LANCAR_GASTO: "Apenas Operadores lançam despesas.",
    Acao.GERENCIAR_FOTOS: "Apenas Operadores gerenciam fotos.",
}


def exigir(ator: Ator, acao: Acao) -> None:
    if not pode(ator.perfil, acao):
        raise AcessoNegado(MENSAGENS_ACESSO.get(acao, "Perfil sem permissão para esta ação."))
