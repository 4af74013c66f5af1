# vida_plena/schemas/beneficiario.py
from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List
from datetime import date, datetime


def _vazio_para_none(v):
    """Converte strings vazias para None antes da validação principal."""
    if isinstance(v, str) and v.strip() == '':
        return None
    return v


class BeneficiarioBase(BaseModel):
    nome_completo: str = Field(..., max_length=150)
    documento_identidade: str = Field(..., max_length=20)
    whatsapp: Optional[str] = Field(None, max_length=20)
    email: Optional[EmailStr] = None
    data_nascimento: date

    @field_validator('whatsapp', 'email', mode='before')
    @classmethod
    def empty_str_to_none(cls, v):
        return _vazio_para_none(v)


class BeneficiarioCreate(BeneficiarioBase):
    pass


class BeneficiarioUpdate(BaseModel):
    nome_completo: Optional[str] = Field(None, max_length=150)
    documento_identidade: Optional[str] = Field(None, max_length=20)
    whatsapp: Optional[str] = Field(None, max_length=20)
    email: Optional[EmailStr] = None
    data_nascimento: Optional[date] = None

    @field_validator('whatsapp', 'email', mode='before')
    @classmethod
    def empty_str_to_none_update(cls, v):
        return _vazio_para_none(v)


class BeneficiarioRead(BeneficiarioBase):
    id: int
    data_cadastramento: Optional[datetime] = None

    class Config:
        from_attributes = True


class BeneficiarioPaginated(BaseModel):
    total: int
    beneficiarios: List[BeneficiarioRead]
