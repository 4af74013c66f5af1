from datetime import datetime
from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from vida_plena.database import Base


class GastoEvento(Base):
    __tablename__ = "gastos_evento"

    id = Column(Integer, primary_key=True, index=True)
    evento_id = Column(Integer, ForeignKey("eventos.id"), nullable=False, index=True)
    descricao_gasto = Column(String(255), nullable=False)
    valor_gasto = Column(Float, nullable=False)
    fornecedor_nome = Column(String(150), nullable=False)
    fornecedor_documento = Column(String(20), nullable=False)  # CPF ou CNPJ
    s3_link_comprovante = Column(String(255), nullable=False)  # chave no storage
    data_lancamento = Column(DateTime, default=datetime.utcnow)

    evento = relationship("Evento", back_populates="gastos")
