from sqlalchemy import Column, Integer, String, Date, DateTime
from sqlalchemy.orm import relationship
from vida_plena.database import Base
from datetime import datetime


class Beneficiario(Base):
    __tablename__ = "beneficiarios"

    id = Column(Integer, primary_key=True, index=True)
    nome_completo = Column(String(150), nullable=False, index=True)
    documento_identidade = Column(String(20), nullable=False, index=True)  # CPF ou RG
    whatsapp = Column(String(20), nullable=True)
    email = Column(String(100), nullable=True)
    data_nascimento = Column(Date, nullable=False)
    data_cadastramento = Column(DateTime, default=datetime.utcnow)

    inscricoes = relationship("InscricaoEvento", back_populates="beneficiario", cascade="all, delete-orphan")
