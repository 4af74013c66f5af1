# -*- coding: utf-8 -*-
"""
Canal de snapshots em tempo real.

Cada tópico corresponde a uma tabela. Sempre que um commit altera a tabela,
o resultado completo do tópico é recarregado e publicado para os assinantes.
Quem assina recebe primeiro o snapshot atual. A fila de cada assinatura é
limitada: cheia, descarta o snapshot mais antigo, pois só o último importa.
"""
import logging
import threading
from collections import deque
from typing import Any, Callable, Dict, List, Optional, Set

from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

TAMANHO_FILA = 5
CHAVE_TABELAS = "vida_plena_tabelas_alteradas"

Snapshot = List[Dict[str, Any]]
Carregador = Callable[[Session], Snapshot]


class Assinatura:
    def __init__(self, canal: "CanalSnapshots", topico: str, tamanho: int = TAMANHO_FILA):
        self.canal = canal
        self.topico = topico
        self._fila = deque(maxlen=tamanho)
        self._cond = threading.Condition()
        self.ativa = True

    def entregar(self, snapshot: Snapshot) -> None:
        with self._cond:
            self._fila.append(snapshot)
            self._cond.notify_all()

    def entregar_se_vazia(self, snapshot: Snapshot) -> bool:
        """Entrega só se nada chegou antes; um snapshot já na fila é mais novo."""
        with self._cond:
            if self._fila:
                return False
            self._fila.append(snapshot)
            self._cond.notify_all()
            return True

    def proximo(self, timeout: Optional[float] = None) -> Optional[Snapshot]:
        """Bloqueia até chegar um snapshot; None se o tempo esgotar ou a assinatura for encerrada."""
        with self._cond:
            if not self._fila and self.ativa:
                self._cond.wait(timeout)
            if self._fila:
                return self._fila.popleft()
            return None

    def pendentes(self) -> int:
        with self._cond:
            return len(self._fila)

    def cancelar(self) -> None:
        self.canal.cancelar(self)
        with self._cond:
            self.ativa = False
            self._cond.notify_all()


class CanalSnapshots:
    def __init__(self):
        self._lock = threading.Lock()
        self._assinaturas: Dict[str, Set[Assinatura]] = {}
        self._carregadores: Dict[str, Carregador] = {}

    def registrar_topico(self, topico: str, carregador: Carregador) -> None:
        self._carregadores[topico] = carregador

    @property
    def topicos(self) -> List[str]:
        return list(self._carregadores)

    def carregar_snapshot(self, db: Session, topico: str) -> Snapshot:
        if topico not in self._carregadores:
            raise KeyError(topico)
        return self._carregadores[topico](db)

    def assinar(self, topico: str, snapshot_inicial: Optional[Snapshot] = None) -> Assinatura:
        assinatura = Assinatura(self, topico)
        if snapshot_inicial is not None:
            assinatura.entregar(snapshot_inicial)
        with self._lock:
            self._assinaturas.setdefault(topico, set()).add(assinatura)
        logger.debug("Nova assinatura no tópico %s", topico)
        return assinatura

    def abrir_assinatura(self, db: Session, topico: str) -> Assinatura:
        """
        Assina o tópico e entrega o snapshot atual.

        A assinatura é registrada antes da leitura: um commit que aconteça durante
        a leitura já publica para ela.
        """
        if topico not in self._carregadores:
            raise KeyError(topico)
        assinatura = self.assinar(topico)
        try:
            snapshot = self.carregar_snapshot(db, topico)
        except SQLAlchemyError:
            assinatura.cancelar()
            raise
        assinatura.entregar_se_vazia(snapshot)
        return assinatura

    def cancelar(self, assinatura: Assinatura) -> None:
        with self._lock:
            self._assinaturas.get(assinatura.topico, set()).discard(assinatura)

    def tem_assinantes(self, topico: str) -> bool:
        with self._lock:
            return bool(self._assinaturas.get(topico))

    def publicar(self, topico: str, snapshot: Snapshot) -> int:
        with self._lock:
            destinos = list(self._assinaturas.get(topico, ()))
        for assinatura in destinos:
            assinatura.entregar(snapshot)
        return len(destinos)

    def publicar_alteracoes(self, bind, tabelas: Set[str]) -> None:
        """Recarrega e publica os tópicos alterados que têm assinantes."""
        topicos = [t for t in tabelas if t in self._carregadores and self.tem_assinantes(t)]
        if not topicos:
            return
        with Session(bind=bind) as leitura:
            for topico in topicos:
                try:
                    snapshot = self._carregadores[topico](leitura)
                except SQLAlchemyError:
                    # O commit já aconteceu; o assinante recebe o próximo snapshot
                    logger.exception("Falha ao recarregar o tópico %s", topico)
                    continue
                entregues = self.publicar(topico, snapshot)
                logger.debug("Snapshot de %s publicado para %d assinante(s)", topico, entregues)


canal = CanalSnapshots()


# --- EVENTOS DA SESSÃO ---

@event.listens_for(Session, "after_flush")
def _marcar_tabelas(session, flush_context):
    tabelas = session.info.setdefault(CHAVE_TABELAS, set())
    for obj in list(session.new) + list(session.dirty) + list(session.deleted):
        tabela = getattr(obj, "__tablename__", None)
        if tabela:
            tabelas.add(tabela)


@event.listens_for(Session, "after_commit")
def _publicar_apos_commit(session):
    tabelas = session.info.pop(CHAVE_TABELAS, None)
    if tabelas:
        canal.publicar_alteracoes(session.get_bind(), tabelas)


@event.listens_for(Session, "after_rollback")
def _descartar_tabelas(session):
    session.info.pop(CHAVE_TABELAS, None)
