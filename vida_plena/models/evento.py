# vida_plena/models/evento.py
from datetime import datetime
from sqlalchemy import Column, Integer, String, Float, Date, Time, DateTime, Text
from sqlalchemy.orm import relationship
from vida_plena.database import Base
from vida_plena.enums import StatusEvento


class Evento(Base):
    __tablename__ = "eventos"

    id = Column(Integer, primary_key=True, index=True)
    nome_evento = Column(String(150), nullable=False)  # imutável após a criação
    tipo_evento = Column(String(50), nullable=False)

    # Agenda
    data_inicio = Column(Date, nullable=False)
    horario_inicio = Column(Time, nullable=False)
    data_fim = Column(Date, nullable=False)
    horario_fim = Column(Time, nullable=False)

    status_evento = Column(String(20), nullable=False, default=StatusEvento.ATIVO.value)  # Ativo, Suspenso, Cancelado, Encerrado
    justificativa_suspensao = Column(Text, nullable=True)
    justificativa_cancelamento = Column(Text, nullable=True)

    # Cache recalculado por saldo.recalcular_saldo_evento (lido pelas listagens)
    verba_disponivel = Column(Float, nullable=False, default=0.0)  # soma das fontes
    saldo_atual = Column(Float, nullable=False, default=0.0)  # fontes - gastos

    # Campos de encerramento
    publico_alcancado = Column(Integer, nullable=True)
    resumo_fechamento = Column(Text, nullable=True)

    data_criacao = Column(DateTime, default=datetime.utcnow)

    fontes_recurso = relationship("FonteRecurso", back_populates="evento", cascade="all, delete-orphan")
    gastos = relationship("GastoEvento", back_populates="evento", cascade="all, delete-orphan")
    fotos = relationship("FotoEvento", back_populates="evento", cascade="all, delete-orphan")
    inscricoes = relationship("InscricaoEvento", back_populates="evento", cascade="all, delete-orphan")
    evolucoes = relationship("EvolucaoEvento", back_populates="evento", cascade="all, delete-orphan")
