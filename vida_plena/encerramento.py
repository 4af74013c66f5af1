# -*- coding: utf-8 -*-
"""
Pré-condições para encerrar um evento.

As contagens são lidas do banco no momento da tentativa, nunca de um valor
guardado no evento.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from vida_plena.erros import AcessoNegado, ErroValidacao
from vida_plena.models.evento import Evento
from vida_plena.models.foto_evento import FotoEvento
from vida_plena.models.inscricao import InscricaoEvento
from vida_plena.permissoes import Acao, Ator, pode

PARTICIPANTES_MINIMO = 5
FOTOS_MINIMO = 2
RESUMO_MINIMO = 100


@dataclass
class ResultadoEncerramento:
    participantes: int
    fotos: int
    tamanho_resumo: int
    perfil_autorizado: bool
    pendencias: List[str] = field(default_factory=list)

    @property
    def apto(self) -> bool:
        return not self.pendencias

    def exigir_apto(self) -> None:
        if not self.perfil_autorizado:
            raise AcessoNegado("Apenas Administradores podem encerrar eventos.")
        if self.pendencias:
            raise ErroValidacao(" ".join(self.pendencias))


def contar_participantes(db: Session, evento_id: int) -> int:
    return db.query(func.count(InscricaoEvento.id)).filter(InscricaoEvento.evento_id == evento_id).scalar() or 0


def contar_fotos(db: Session, evento_id: int) -> int:
    return db.query(func.count(FotoEvento.id)).filter(FotoEvento.evento_id == evento_id).scalar() or 0


def verificar_encerramento(db: Session, evento: Evento, resumo: Optional[str], ator: Ator) -> ResultadoEncerramento:
    participantes = contar_participantes(db, evento.id)
    fotos = contar_fotos(db, evento.id)
    tamanho_resumo = len((resumo or "").strip())
    perfil_autorizado = pode(ator.perfil, Acao.ENCERRAR_EVENTO)

    pendencias = []
    if participantes < PARTICIPANTES_MINIMO:
        pendencias.append(f"Mínimo {PARTICIPANTES_MINIMO} participantes para encerrar.")
    if fotos < FOTOS_MINIMO:
        pendencias.append(f"Mínimo {FOTOS_MINIMO} fotos.")
    if tamanho_resumo < RESUMO_MINIMO:
        pendencias.append(f"Resumo deve ter no mínimo {RESUMO_MINIMO} caracteres.")
    if not perfil_autorizado:
        pendencias.append("Permissão de Administrador necessária.")

    return ResultadoEncerramento(
        participantes=participantes,
        fotos=fotos,
        tamanho_resumo=tamanho_resumo,
        perfil_autorizado=perfil_autorizado,
        pendencias=pendencias,
    )
