from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from vida_plena import auth, database
from vida_plena.models.usuario import Usuario
from vida_plena.schemas import usuario as schemas_usuario


router = APIRouter(tags=["Authentication"])


@router.post("/token", response_model=schemas_usuario.Token)
async def login_for_access_token(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(database.get_db)):
    user = auth.get_user(db, email=form_data.username)  # email como username
    if not user or not user.hashed_password or not auth.verify_password(form_data.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Email ou senha incorretos",
            headers={"WWW-Authenticate": "Bearer"},
        )
    access_token = auth.create_access_token(
        data={"sub": user.email, "perfil": user.perfil}
    )

    user_info = schemas_usuario.UsuarioRead.model_validate(user)
    return {"access_token": access_token, "token_type": "bearer", "user_info": user_info}


@router.get("/me", response_model=schemas_usuario.UsuarioRead)
async def read_users_me(current_user: Usuario = Depends(auth.get_current_user)):
    """
    Retorna os dados do usuário atualmente logado.
    """
    return current_user
