from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class GastoEventoBase(BaseModel):
    descricao_gasto: str = Field(..., max_length=255)
    valor_gasto: float = Field(..., allow_inf_nan=False)
    fornecedor_nome: str = Field(..., max_length=150)
    fornecedor_documento: str = Field(..., max_length=20)
    s3_link_comprovante: str = Field(..., max_length=255)


class GastoEventoCreate(GastoEventoBase):
    pass


class GastoEventoRead(GastoEventoBase):
    id: int
    evento_id: int
    data_lancamento: Optional[datetime] = None

    class Config:
        from_attributes = True


class ComprovanteEnviado(BaseModel):
    chave: str
    url: str
