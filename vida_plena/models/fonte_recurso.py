# -*- coding: utf-8 -*-
"""
Modelo SQLAlchemy para as fontes de recurso (doações e uso do caixa) de um evento.
"""
from datetime import datetime
from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from vida_plena.database import Base


class FonteRecurso(Base):
    __tablename__ = "fontes_recurso"

    id = Column(Integer, primary_key=True, index=True)
    evento_id = Column(Integer, ForeignKey("eventos.id"), nullable=False, index=True)
    origem = Column(String(20), nullable=False)  # 'Doacao' ou 'Caixa'
    valor = Column(Float, nullable=False)

    # Campos de Doação
    doador_nome = Column(String(150), nullable=True)
    doador_documento = Column(String(20), nullable=True)  # CPF/CNPJ
    forma_pagamento = Column(String(20), nullable=True)  # PIX, Transferencia, Debito, Dinheiro

    # Campos de Caixa
    justificativa_uso = Column(Text, nullable=True)

    data_lancamento = Column(DateTime, default=datetime.utcnow)

    evento = relationship("Evento", back_populates="fontes_recurso")
