from pydantic import BaseModel
from typing import Dict, List


class ResumoEvento(BaseModel):
    id: int
    nome_evento: str
    status_evento: str
    receita: float
    despesa: float
    saldo: float
    participantes: int
    percentual_beneficiarios: float


class ResumoDashboard(BaseModel):
    total_eventos: int
    total_beneficiarios: int
    receita_total: float
    despesa_total: float
    saldo_total: float
    eventos_por_status: Dict[str, int]
    eventos: List[ResumoEvento]


class SaldoCaixa(BaseModel):
    saldo_disponivel: float
