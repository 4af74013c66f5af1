from pydantic import BaseModel, Field
from typing import Optional
from datetime import date


class EvolucaoEventoCreate(BaseModel):
    data_evolucao: date
    descricao_evolucao: str = Field(..., min_length=1, max_length=255)
    observacoes: Optional[str] = None


class EvolucaoEventoRead(EvolucaoEventoCreate):
    id: int
    evento_id: int

    class Config:
        from_attributes = True
