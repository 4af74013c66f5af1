# vida_plena/routes/inscricoes_fastapi.py
from typing import List
from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session

from vida_plena import inscricoes
from vida_plena.auth import get_current_ator, requer
from vida_plena.database import get_db
from vida_plena.notificacoes import NotificationService, get_notification_service
from vida_plena.permissoes import Acao, Ator
from vida_plena.schemas.inscricao import InscricaoCreate, InscricaoRead

router = APIRouter(tags=["Inscricoes"])

consultar = requer(Acao.CONSULTAR_OPERACIONAL)


@router.post("", response_model=InscricaoRead, status_code=status.HTTP_201_CREATED)
def create_inscricao(
    inscricao: InscricaoCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    ator: Ator = Depends(get_current_ator),
    notificador: NotificationService = Depends(get_notification_service),
):
    db_inscricao = inscricoes.inscrever_beneficiario(db, inscricao.evento_id, inscricao.beneficiario_id, ator)

    beneficiario = db_inscricao.beneficiario
    evento = db_inscricao.evento
    background_tasks.add_task(
        notificador.enviar_confirmacao_evento,
        beneficiario.nome_completo,
        beneficiario.email,
        evento.nome_evento,
        evento.data_inicio,
        evento.horario_inicio,
        evento.horario_fim,
    )
    return db_inscricao


@router.get("/evento/{evento_id}", response_model=List[InscricaoRead])
def read_inscricoes_evento(evento_id: int, db: Session = Depends(get_db), ator: Ator = Depends(consultar)):
    return inscricoes.listar_por_evento(db, evento_id)


@router.get("/beneficiario/{beneficiario_id}", response_model=List[InscricaoRead])
def read_inscricoes_beneficiario(beneficiario_id: int, db: Session = Depends(get_db), ator: Ator = Depends(consultar)):
    return inscricoes.listar_por_beneficiario(db, beneficiario_id)


@router.delete("/{inscricao_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_inscricao(inscricao_id: int, db: Session = Depends(get_db), ator: Ator = Depends(get_current_ator)):
    inscricoes.remover_inscricao(db, inscricao_id, ator)
    return None
