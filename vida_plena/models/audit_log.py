# -*- coding: utf-8 -*-
"""
Registro de auditoria. Apenas inserções; nenhuma rota altera ou remove linhas.
"""
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Text
from vida_plena.database import Base


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True)
    data_hora = Column(DateTime, default=datetime.utcnow, index=True)
    usuario = Column(String(150), nullable=False)
    tipo_acao = Column(String(50), nullable=False, index=True)  # CriarEvento, Suspender, Cancelar...
    justificativa = Column(Text, nullable=True)
