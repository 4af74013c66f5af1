# vida_plena/models/inscricao.py
from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from vida_plena.database import Base
from datetime import datetime


class InscricaoEvento(Base):
    __tablename__ = 'inscricoes_evento'
    __table_args__ = (
        UniqueConstraint('beneficiario_id', 'evento_id', name='uq_inscricao_beneficiario_evento'),
    )

    id = Column(Integer, primary_key=True, index=True)
    beneficiario_id = Column(Integer, ForeignKey('beneficiarios.id'), nullable=False, index=True)
    evento_id = Column(Integer, ForeignKey('eventos.id'), nullable=False, index=True)
    data_inscricao = Column(DateTime, default=datetime.utcnow)

    beneficiario = relationship("Beneficiario", back_populates="inscricoes")
    evento = relationship("Evento", back_populates="inscricoes")
