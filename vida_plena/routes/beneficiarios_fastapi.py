# vida_plena/routes/beneficiarios_fastapi.py
from typing import Optional
from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session

from vida_plena import beneficiarios
from vida_plena.auth import get_current_ator, requer
from vida_plena.database import get_db
from vida_plena.inscricoes import obter_beneficiario
from vida_plena.models.beneficiario import Beneficiario
from vida_plena.notificacoes import NotificationService, get_notification_service
from vida_plena.permissoes import Acao, Ator
from vida_plena.schemas.beneficiario import (
    BeneficiarioCreate,
    BeneficiarioPaginated,
    BeneficiarioRead,
    BeneficiarioUpdate,
)

router = APIRouter(tags=["Beneficiarios"])

consultar = requer(Acao.CONSULTAR_OPERACIONAL)


@router.post("", response_model=BeneficiarioRead, status_code=status.HTTP_201_CREATED)
def create_beneficiario(
    beneficiario: BeneficiarioCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    ator: Ator = Depends(get_current_ator),
    notificador: NotificationService = Depends(get_notification_service),
):
    """
    Cadastra o beneficiário e dispara a mensagem de boas-vindas em segundo plano.
    """
    db_beneficiario = beneficiarios.cadastrar_beneficiario(db, beneficiario, ator)
    background_tasks.add_task(
        notificador.enviar_boas_vindas,
        db_beneficiario.nome_completo,
        db_beneficiario.email,
        db_beneficiario.whatsapp,
    )
    return db_beneficiario


@router.get("", response_model=BeneficiarioPaginated)
def read_beneficiarios(
    search: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    ator: Ator = Depends(consultar),
):
    query = db.query(Beneficiario)
    if search:
        query = query.filter(Beneficiario.nome_completo.ilike(f"%{search}%"))

    total = query.count()
    itens = query.order_by(Beneficiario.nome_completo).offset(skip).limit(limit).all()
    return {"total": total, "beneficiarios": itens}


@router.get("/{beneficiario_id}", response_model=BeneficiarioRead)
def read_beneficiario(beneficiario_id: int, db: Session = Depends(get_db), ator: Ator = Depends(consultar)):
    return obter_beneficiario(db, beneficiario_id)


@router.put("/{beneficiario_id}", response_model=BeneficiarioRead)
def update_beneficiario(beneficiario_id: int, beneficiario: BeneficiarioUpdate, db: Session = Depends(get_db),
                        ator: Ator = Depends(get_current_ator)):
    return beneficiarios.atualizar_beneficiario(db, beneficiario_id, beneficiario, ator)
