# -*- coding: utf-8 -*-
"""
Armazenamento de fotos e comprovantes em bucket compatível com S3 (R2, MinIO).

O banco guarda apenas a chave do objeto; a URL é montada na leitura.
"""
import logging
import uuid
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from vida_plena.config import Config
from vida_plena.erros import ErroColaborador

logger = logging.getLogger(__name__)


def _nome_seguro(nome_arquivo: Optional[str], extensao_padrao: str) -> str:
    extensao = extensao_padrao
    if nome_arquivo and "." in nome_arquivo:
        extensao = nome_arquivo.rsplit(".", 1)[1].lower()
    return f"{uuid.uuid4().hex}.{extensao}"


def caminho_foto(evento_id: int) -> str:
    return f"eventos/{evento_id}/fotos/{_nome_seguro(None, 'jpg')}"


def caminho_comprovante(evento_id: int, nome_arquivo: Optional[str]) -> str:
    return f"eventos/{evento_id}/comprovantes/{_nome_seguro(nome_arquivo, 'pdf')}"


class ArmazenamentoS3:
    def __init__(self, client=None, bucket: Optional[str] = None, public_url: Optional[str] = None,
                 expira_segundos: int = Config.URL_ASSINADA_EXPIRA_SEGUNDOS):
        self._client = client
        self.bucket = bucket
        self.public_url = public_url.rstrip("/") if public_url else None
        self.expira_segundos = expira_segundos

    @classmethod
    def from_config(cls) -> "ArmazenamentoS3":
        return cls(bucket=Config.S3_BUCKET_NAME, public_url=Config.PUBLIC_BUCKET_URL)

    @property
    def client(self):
        if self._client is None:
            if not all([Config.S3_ENDPOINT_URL, Config.AWS_ACCESS_KEY_ID, Config.AWS_SECRET_ACCESS_KEY, self.bucket]):
                logger.error("Variáveis de ambiente do R2 não configuradas.")
                raise ErroColaborador("Armazenamento de arquivos não configurado.")
            self._client = boto3.client(
                's3',
                endpoint_url=Config.S3_ENDPOINT_URL,
                aws_access_key_id=Config.AWS_ACCESS_KEY_ID,
                aws_secret_access_key=Config.AWS_SECRET_ACCESS_KEY,
                region_name="auto",
            )
        return self._client

    def armazenar(self, caminho: str, conteudo, content_type: str) -> str:
        """Envia o arquivo e devolve a chave gravada no banco."""
        try:
            self.client.upload_fileobj(conteudo, self.bucket, caminho, ExtraArgs={'ContentType': content_type})
        except (BotoCoreError, ClientError) as e:
            logger.error("Erro no upload para o storage (%s): %s", caminho, e)
            raise ErroColaborador("Falha ao enviar o arquivo para o armazenamento.")
        logger.info("Arquivo enviado: %s", caminho)
        return caminho

    def resolver(self, chave: Optional[str]) -> Optional[str]:
        if not chave:
            return None
        if chave.startswith("http://") or chave.startswith("https://"):
            return chave
        if self.public_url:
            return f"{self.public_url}/{chave}"
        try:
            return self.client.generate_presigned_url(
                'get_object',
                Params={'Bucket': self.bucket, 'Key': chave},
                ExpiresIn=self.expira_segundos,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("Erro ao gerar URL assinada para %s: %s", chave, e)
            raise ErroColaborador("Falha ao gerar o link do arquivo.")

    def remover(self, chave: str) -> None:
        try:
            self.client.delete_object(Bucket=self.bucket, Key=chave)
        except (BotoCoreError, ClientError) as e:
            logger.error("Erro ao remover %s do storage: %s", chave, e)
            raise ErroColaborador("Falha ao remover o arquivo do armazenamento.")


_armazenamento = ArmazenamentoS3.from_config()


def get_armazenamento() -> ArmazenamentoS3:
    return _armazenamento
