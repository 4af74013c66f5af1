from sqlalchemy import Column, Integer, String, Date, ForeignKey, Text
from sqlalchemy.orm import relationship
from vida_plena.database import Base


class EvolucaoEvento(Base):
    __tablename__ = "evolucoes_evento"

    id = Column(Integer, primary_key=True, index=True)
    evento_id = Column(Integer, ForeignKey("eventos.id"), nullable=False, index=True)
    data_evolucao = Column(Date, nullable=False)
    descricao_evolucao = Column(String(255), nullable=False)
    observacoes = Column(Text, nullable=True)

    evento = relationship("Evento", back_populates="evolucoes")
