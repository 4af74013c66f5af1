import logging
import os

from sqlalchemy.exc import SQLAlchemyError

from vida_plena.auth import get_password_hash
from vida_plena.database import SessionLocal
from vida_plena.models.usuario import Usuario
from vida_plena.permissoes import Perfil

# Importação dos outros modelos para garantir que o SQLAlchemy registre tudo
from vida_plena.models import (  # noqa: F401
    audit_log, beneficiario, evento, evolucao_evento, fonte_recurso, foto_evento, gasto_evento, inscricao
)

logger = logging.getLogger(__name__)

USUARIOS_INICIAIS = [
    ("gerente@vidaplena.org", "Gerente do Sistema", Perfil.GERENCIADOR, "FIRST_MANAGER_PASSWORD"),
    ("admin@vidaplena.org", "Administrador", Perfil.ADMINISTRADOR, "FIRST_ADMIN_PASSWORD"),
]


def create_first_user():
    db = SessionLocal()

    try:
        for email, nome, perfil, variavel_senha in USUARIOS_INICIAIS:
            if db.query(Usuario).filter(Usuario.email == email).first():
                logger.info("Usuário inicial %s já existe.", email)
                continue

            senha = os.getenv(variavel_senha, "admin")
            db.add(Usuario(
                email=email,
                nome=nome,
                hashed_password=get_password_hash(senha),
                perfil=perfil.value
            ))
            logger.info("Criando usuário inicial %s (%s)", email, perfil.value)
        db.commit()

    except SQLAlchemyError as e:
        logger.error("Erro ao criar usuários iniciais: %s", e)
        db.rollback()
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    create_first_user()
