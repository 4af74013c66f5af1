# vida_plena/schemas/inscricao.py
from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from .beneficiario import BeneficiarioRead


class InscricaoBase(BaseModel):
    beneficiario_id: int
    evento_id: int


class InscricaoCreate(InscricaoBase):
    pass


class InscricaoRead(InscricaoBase):
    id: int
    data_inscricao: Optional[datetime] = None
    beneficiario: Optional[BeneficiarioRead] = None

    class Config:
        from_attributes = True
