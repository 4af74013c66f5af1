import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from vida_plena.enums import TipoAcao
from vida_plena.models.audit_log import AuditLog

logger = logging.getLogger(__name__)


def registrar_auditoria(db: Session, usuario: str, tipo_acao: TipoAcao, justificativa: Optional[str] = None) -> AuditLog:
    """Adiciona a entrada à sessão; o commit fica com quem chama, junto da alteração auditada."""
    entrada = AuditLog(
        usuario=usuario,
        tipo_acao=tipo_acao.value,
        justificativa=justificativa,
        data_hora=datetime.now(timezone.utc),
    )
    db.add(entrada)
    logger.info("Auditoria: %s por %s", tipo_acao.value, usuario)
    return entrada
