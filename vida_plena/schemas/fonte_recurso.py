# vida_plena/schemas/fonte_recurso.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from vida_plena.enums import FormaPagamento, OrigemRecurso


class FonteRecursoBase(BaseModel):
    origem: OrigemRecurso
    valor: float = Field(..., allow_inf_nan=False)

    # Doação
    doador_nome: Optional[str] = Field(None, max_length=150)
    doador_documento: Optional[str] = Field(None, max_length=20)
    forma_pagamento: Optional[FormaPagamento] = None

    # Caixa
    justificativa_uso: Optional[str] = None


class FonteRecursoCreate(FonteRecursoBase):
    pass


class FonteRecursoRead(BaseModel):
    id: int
    evento_id: int
    origem: str
    valor: float
    doador_nome: Optional[str] = None
    doador_documento: Optional[str] = None
    forma_pagamento: Optional[str] = None
    justificativa_uso: Optional[str] = None
    data_lancamento: Optional[datetime] = None

    class Config:
        from_attributes = True
