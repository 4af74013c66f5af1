# vida_plena/schemas/evento.py
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date, datetime, time

from vida_plena.enums import TipoEvento
from .fonte_recurso import FonteRecursoCreate


class EventoCreate(BaseModel):
    nome_evento: str = Field(..., max_length=150)
    tipo_evento: TipoEvento
    data_inicio: date
    horario_inicio: time
    data_fim: Optional[date] = None  # padrão: mesmo dia do início
    horario_fim: time
    fontes: List[FonteRecursoCreate] = []


class EventoUpdate(BaseModel):
    # O nome do evento não pode ser alterado depois de criado
    tipo_evento: Optional[TipoEvento] = None
    data_inicio: Optional[date] = None
    horario_inicio: Optional[time] = None
    data_fim: Optional[date] = None
    horario_fim: Optional[time] = None

    class Config:
        extra = "forbid"


class EventoRead(BaseModel):
    id: int
    nome_evento: str
    tipo_evento: str
    data_inicio: date
    horario_inicio: time
    data_fim: date
    horario_fim: time
    status_evento: str
    verba_disponivel: float = 0.0
    saldo_atual: float = 0.0
    justificativa_suspensao: Optional[str] = None
    justificativa_cancelamento: Optional[str] = None
    publico_alcancado: Optional[int] = None
    resumo_fechamento: Optional[str] = None
    data_criacao: Optional[datetime] = None

    class Config:
        from_attributes = True


class EventoDetalhe(EventoRead):
    total_gastos: float = 0.0
    participantes: int = 0
    fotos: int = 0


class JustificativaRequest(BaseModel):
    justificativa: str = ""


class EncerramentoRequest(BaseModel):
    resumo_fechamento: str = ""


class ChecklistEncerramento(BaseModel):
    participantes: int
    fotos: int
    tamanho_resumo: int
    perfil_autorizado: bool
    pendencias: List[str] = []
    apto: bool
