from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class AuditLogRead(BaseModel):
    id: int
    data_hora: datetime
    usuario: str
    tipo_acao: str
    justificativa: Optional[str] = None

    class Config:
        from_attributes = True
