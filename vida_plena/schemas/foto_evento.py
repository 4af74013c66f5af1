from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class FotoEventoRead(BaseModel):
    id: int
    evento_id: int
    s3_link_foto: str
    data_envio: Optional[datetime] = None
    url: Optional[str] = None

    class Config:
        from_attributes = True
