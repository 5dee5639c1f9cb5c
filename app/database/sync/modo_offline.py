"""Flag global de modo offline forçado."""
from __future__ import annotations

import logging
import threading
from typing import Callable, List

from app.config.settings import FORCE_OFFLINE
from app.utils.prometheus_metrics import sync_modo_offline

logger = logging.getLogger(__name__)

ListenerModo = Callable[[bool], None]


class ModoOffline:
    """
    Seleciona entre o banco remoto e o local para todo o processo.

    Ao alternar, avisa todas as coleções registradas para que derrubem e
    refaçam suas assinaturas.
    """

    def __init__(self, offline: bool = False):
        self._offline = offline
        self._lock = threading.RLock()
        self._listeners: List[ListenerModo] = []
        sync_modo_offline.set(1 if offline else 0)

    @property
    def offline(self) -> bool:
        return self._offline

    def registrar(self, listener: ListenerModo) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remover(self, listener: ListenerModo) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def definir(self, offline: bool) -> bool:
        """Altera o modo. Retorna True se houve mudança."""
        with self._lock:
            if offline == self._offline:
                return False
            self._offline = offline
            listeners = list(self._listeners)
        sync_modo_offline.set(1 if offline else 0)
        logger.info("[Sync] Modo offline forçado %s", "ATIVADO" if offline else "DESATIVADO")
        for listener in listeners:
            listener(offline)
        return True


modo_offline = ModoOffline(FORCE_OFFLINE)
