# vida_plena/auth.py
from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from vida_plena import database
from vida_plena.config import Config
from vida_plena.models.usuario import Usuario
from vida_plena.permissoes import Acao, Ator, Perfil, exigir


# --- CONFIGURAÇÃO DE SEGURANÇA ---
SECRET_KEY = Config.SECRET_KEY
ALGORITHM = Config.ALGORITHM
ACCESS_TOKEN_EXPIRE_MINUTES = Config.ACCESS_TOKEN_EXPIRE_MINUTES

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/token")


def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password):
    return pwd_context.hash(password)


def create_access_token(data: dict):
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)
    return encoded_jwt


# --- DEPENDÊNCIAS DE AUTENTICAÇÃO E AUTORIZAÇÃO ---
def get_user(db: Session, email: str):
    return db.query(Usuario).filter(Usuario.email == email).first()


async def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(database.get_db)):
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Credenciais inválidas", headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        email: str = payload.get("sub")
        if email is None:
            raise credentials_exception
    except JWTError:
        raise credentials_exception
    user = get_user(db, email=email)
    if user is None:
        raise credentials_exception
    return user


async def get_current_ator(current_user: Usuario = Depends(get_current_user)) -> Ator:
    """
    Converte o usuário logado no contexto de autorização usado pelas regras de negócio.
    Bloqueia perfis fora do conjunto conhecido.
    """
    try:
        perfil = Perfil(current_user.perfil)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Seu perfil não tem acesso ao sistema."
        )
    return Ator(identificacao=current_user.email, perfil=perfil)


def requer(acao: Acao):
    """Dependência que libera a rota apenas para perfis com permissão para `acao`."""
    async def dependencia(ator: Ator = Depends(get_current_ator)) -> Ator:
        exigir(ator, acao)
        return ator
    return dependencia
