from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from vida_plena.database import Base


class FotoEvento(Base):
    __tablename__ = "fotos_evento"

    id = Column(Integer, primary_key=True, index=True)
    evento_id = Column(Integer, ForeignKey("eventos.id"), nullable=False, index=True)
    s3_link_foto = Column(String(255), nullable=False)  # chave no storage
    data_envio = Column(DateTime, default=datetime.utcnow)

    evento = relationship("Evento", back_populates="fotos")
