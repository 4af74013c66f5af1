from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from vida_plena import database
from vida_plena.auth import get_password_hash, requer
from vida_plena.models.usuario import Usuario
from vida_plena.permissoes import Acao
from vida_plena.schemas import usuario as schemas_usuario

router = APIRouter(
    tags=["Usuarios"],
    dependencies=[Depends(requer(Acao.GERENCIAR_USUARIOS))]
)


@router.post("", response_model=schemas_usuario.UsuarioRead, status_code=status.HTTP_201_CREATED)
def create_user(user: schemas_usuario.UsuarioCreate, db: Session = Depends(database.get_db)):
    if db.query(Usuario).filter(Usuario.email == user.email).first():
        raise HTTPException(status_code=400, detail="Email já registrado")

    db_user = Usuario(
        email=user.email,
        nome=user.nome,
        hashed_password=get_password_hash(user.password),
        perfil=user.perfil.value
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


@router.get("", response_model=List[schemas_usuario.UsuarioRead])
def read_users(skip: int = 0, limit: int = 100, db: Session = Depends(database.get_db)):
    return db.query(Usuario).order_by(Usuario.nome).offset(skip).limit(limit).all()


@router.get("/{user_id}", response_model=schemas_usuario.UsuarioRead)
def read_user(user_id: int, db: Session = Depends(database.get_db)):
    db_user = db.query(Usuario).filter(Usuario.id == user_id).first()
    if db_user is None:
        raise HTTPException(status_code=404, detail="Usuário não encontrado")
    return db_user


@router.put("/{user_id}", response_model=schemas_usuario.UsuarioRead)
def update_user(user_id: int, user: schemas_usuario.UsuarioUpdate, db: Session = Depends(database.get_db)):
    db_user = db.query(Usuario).filter(Usuario.id == user_id).first()
    if not db_user:
        raise HTTPException(status_code=404, detail="Usuário não encontrado")

    update_data = user.model_dump(exclude_unset=True)

    if "email" in update_data and update_data["email"] != db_user.email:
        if db.query(Usuario).filter(Usuario.email == update_data["email"]).first():
            raise HTTPException(status_code=400, detail="Email já está em uso.")

    if "password" in update_data:
        if update_data["password"]:
            db_user.hashed_password = get_password_hash(update_data["password"])
        del update_data["password"]

    if update_data.get("perfil") is not None:
        update_data["perfil"] = update_data["perfil"].value

    for key, value in update_data.items():
        if value is not None:
            setattr(db_user, key, value)

    db.commit()
    db.refresh(db_user)
    return db_user


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, db: Session = Depends(database.get_db)):
    db_user = db.query(Usuario).filter(Usuario.id == user_id).first()
    if not db_user:
        raise HTTPException(status_code=404, detail="Usuário não encontrado")
    db.delete(db_user)
    db.commit()
    return None
