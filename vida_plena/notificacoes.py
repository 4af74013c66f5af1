# -*- coding: utf-8 -*-
"""
Disparo de automações (e-mail / WhatsApp) por webhook (Make, Zapier).

O corpo vai como formulário, com o campo `type` indicando o fluxo. Uma falha
no webhook é registrada em log e nunca interrompe a operação que a originou.
"""
import enum
import logging
from datetime import date, time
from typing import Dict, Optional

import httpx

from vida_plena.config import Config

logger = logging.getLogger(__name__)


class TipoNotificacao(str, enum.Enum):
    BOAS_VINDAS = "welcome"
    CONFIRMACAO_EVENTO = "event_confirmation"


class NotificationService:
    def __init__(self, url_beneficiario: Optional[str] = None, url_evento: Optional[str] = None,
                 timeout: float = Config.NOTIFICACAO_TIMEOUT, transport: Optional[httpx.BaseTransport] = None):
        self.urls = {
            TipoNotificacao.BOAS_VINDAS: url_beneficiario,
            TipoNotificacao.CONFIRMACAO_EVENTO: url_evento,
        }
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_config(cls) -> "NotificationService":
        return cls(url_beneficiario=Config.WEBHOOK_URL_BENEFICIARIO, url_evento=Config.WEBHOOK_URL_EVENTO)

    def send(self, tipo: TipoNotificacao, payload: Dict[str, str]) -> bool:
        """Retorna True quando o webhook respondeu com sucesso."""
        url = self.urls.get(tipo)
        if not url:
            logger.warning("URL do webhook de %s não configurada. Simulando envio: %s", tipo.value, payload)
            return False

        dados = {"type": tipo.value}
        dados.update({k: "" if v is None else str(v) for k, v in payload.items()})
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                resp = client.post(url, data=dados)
                resp.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error("Erro ao disparar webhook %s: %s", tipo.value, exc)
            return False

        logger.info("Webhook %s disparado com sucesso", tipo.value)
        return True

    def enviar_boas_vindas(self, nome: str, email: Optional[str], whatsapp: Optional[str]) -> bool:
        return self.send(TipoNotificacao.BOAS_VINDAS, {
            "nome": nome,
            "email": email or "",
            "whatsapp": whatsapp or "",
        })

    def enviar_confirmacao_evento(self, nome_beneficiario: str, email_beneficiario: Optional[str],
                                  nome_evento: str, data: date, hora_inicio: time, hora_fim: time) -> bool:
        return self.send(TipoNotificacao.CONFIRMACAO_EVENTO, {
            "nomeBeneficiario": nome_beneficiario,
            "emailBeneficiario": email_beneficiario or "",
            "nomeEvento": nome_evento,
            "data": data.strftime("%d/%m/%Y"),
            "horaInicio": hora_inicio.strftime("%H:%M"),
            "horaFim": hora_fim.strftime("%H:%M"),
        })


_notification_service = NotificationService.from_config()


def get_notification_service() -> NotificationService:
    return _notification_service
