from pydantic import BaseModel, EmailStr, Field
from typing import Optional

from vida_plena.permissoes import Perfil


class UsuarioBase(BaseModel):
    email: EmailStr
    nome: Optional[str] = Field(None, max_length=150)
    perfil: Perfil


class UsuarioCreate(UsuarioBase):
    password: str = Field(..., min_length=6)


class UsuarioUpdate(BaseModel):
    email: Optional[EmailStr] = None
    nome: Optional[str] = None
    password: Optional[str] = Field(None, min_length=6)
    perfil: Optional[Perfil] = None


class UsuarioRead(UsuarioBase):
    id: int

    class Config:
        from_attributes = True


class Token(BaseModel):
    access_token: str
    token_type: str
    user_info: UsuarioRead
