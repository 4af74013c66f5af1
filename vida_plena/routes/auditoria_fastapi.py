from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from vida_plena.auth import requer
from vida_plena.database import get_db
from vida_plena.enums import TipoAcao
from vida_plena.models.audit_log import AuditLog
from vida_plena.permissoes import Acao
from vida_plena.schemas.audit_log import AuditLogRead

router = APIRouter(
    tags=["Auditoria"],
    dependencies=[Depends(requer(Acao.CONSULTAR_OPERACIONAL))]
)


@router.get("", response_model=List[AuditLogRead])
def read_audit_logs(tipo_acao: Optional[TipoAcao] = None, skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    """Registros de auditoria, do mais recente para o mais antigo."""
    query = db.query(AuditLog)
    if tipo_acao is not None:
        query = query.filter(AuditLog.tipo_acao == tipo_acao.value)
    return query.order_by(AuditLog.data_hora.desc(), AuditLog.id.desc()).offset(skip).limit(limit).all()
