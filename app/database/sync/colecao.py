"""
Coleção sincronizada: remoto primeiro, local como fallback.

Toda escrita tenta o banco remoto; qualquer erro do SQLAlchemy (rede,
permissão, timeout) faz a mesma operação ser repetida no banco local, com
um warning no log. Quem chama nunca vê o erro remoto.

Escritas remotas bem-sucedidas são espelhadas no banco local, de forma que
o espelho acompanhe o último snapshot remoto.
"""
from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable, Generic, List, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.database.sync.backends import BackendSql, LOCAL, REMOTO
from app.database.sync.modo_offline import ModoOffline, modo_offline as modo_global
from app.utils.prometheus_metrics import sync_fallback_total

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

CallbackSnapshot = Callable[[List[T]], None]


class Assinatura(Generic[T]):
    """Recebe o snapshot completo da coleção a cada alteração."""

    def __init__(self, colecao: "ColecaoSincronizada[T]", callback: CallbackSnapshot):
        self.colecao = colecao
        self.callback = callback
        self.usando_local = False
        self.ativa = True

    def cancelar(self) -> None:
        if self.ativa:
            self.ativa = False
            self.colecao._remover_assinatura(self)


class ColecaoSincronizada(ABC, Generic[T]):
    nome: str = "colecao"

    def __init__(
        self,
        local: BackendSql,
        remoto: Optional[BackendSql] = None,
        modo: Optional[ModoOffline] = None,
    ):
        self.local = local
        self.remoto = remoto
        self.modo = modo or modo_global
        self._lock = threading.RLock()
        self._assinaturas: List[Assinatura[T]] = []
        self.modo.registrar(self._ao_alternar_modo)

    # ------------------------------------------------------------------ #
    # Contrato das subclasses
    # ------------------------------------------------------------------ #
    @abstractmethod
    def _listar(self, db: Session) -> List[T]:
        """Snapshot completo da coleção (mesma consulta nos dois backends)."""

    # ------------------------------------------------------------------ #
    # Seleção de backend
    # ------------------------------------------------------------------ #
    @property
    def usando_remoto(self) -> bool:
        return self.remoto is not None and not self.modo.offline

    def _registrar_fallback(self, operacao: str, erro: Exception) -> None:
        logger.warning(
            "[Sync] %s.%s falhou no banco remoto, usando o banco local: %s",
            self.nome, operacao, erro,
        )
        sync_fallback_total.labels(colecao=self.nome, operacao=operacao).inc()

    def _executar(
        self,
        operacao: str,
        remota: Callable[[Session], R],
        local: Callable[[Session], R],
        espelho: Optional[Callable[[Session, R], None]] = None,
        local_se_vazio: bool = False,
    ) -> R:
        """
        Executa uma escrita no remoto e, em caso de falha, no local.

        `local_se_vazio` repete a operação no local quando o remoto responde
        None (registro que só existe no banco local).
        """
        if self.usando_remoto:
            try:
                with self.remoto.sessao() as db:
                    resultado = remota(db)
            except SQLAlchemyError as e:
                self._registrar_fallback(operacao, e)
            else:
                if resultado is not None or not local_se_vazio:
                    if espelho is not None:
                        self._espelhar(operacao, espelho, resultado)
                    self._notificar()
                    return resultado
                logger.info("[Sync] %s.%s sem registro no remoto, tentando o local", self.nome, operacao)

        with self.local.sessao() as db:
            resultado = local(db)
        self._notificar()
        return resultado

    def _ler(self, operacao: str, consulta: Callable[[Session], R]) -> R:
        if self.usando_remoto:
            try:
                with self.remoto.sessao() as db:
                    return consulta(db)
            except SQLAlchemyError as e:
                self._registrar_fallback(operacao, e)
        with self.local.sessao() as db:
            return consulta(db)

    def _buscar(self, operacao: str, consulta: Callable[[Session], Optional[R]]) -> Optional[R]:
        """Como `_ler`, mas procura também no local quando o remoto não tem o registro."""
        if self.usando_remoto:
            try:
                with self.remoto.sessao() as db:
                    resultado = consulta(db)
            except SQLAlchemyError as e:
                self._registrar_fallback(operacao, e)
            else:
                if resultado is not None:
                    return resultado
        with self.local.sessao() as db:
            return consulta(db)

    def _espelhar(self, operacao: str, espelho: Callable[[Session, R], None], resultado: R) -> None:
        try:
            with self.local.sessao() as db:
                espelho(db, resultado)
        except SQLAlchemyError as e:
            logger.warning("[Sync] Falha ao espelhar %s.%s no banco local: %s", self.nome, operacao, e)

    # ------------------------------------------------------------------ #
    # Leitura e assinaturas
    # ------------------------------------------------------------------ #
    def listar(self) -> List[T]:
        return self._ler("listar", self._listar)

    def listar_local(self) -> List[T]:
        with self.local.sessao() as db:
            return self._listar(db)

    def assinar(self, callback: CallbackSnapshot) -> Assinatura[T]:
        assinatura = Assinatura(self, callback)
        with self._lock:
            self._assinaturas.append(assinatura)
        self._entregar(assinatura)
        return assinatura

    def _remover_assinatura(self, assinatura: Assinatura[T]) -> None:
        with self._lock:
            if assinatura in self._assinaturas:
                self._assinaturas.remove(assinatura)

    @property
    def total_assinaturas(self) -> int:
        return len(self._assinaturas)

    def _snapshot(self, assinatura: Assinatura[T]) -> List[T]:
        # Assinatura que perdeu o remoto fica no local até o próximo toggle de modo
        if not assinatura.usando_local and self.usando_remoto:
            try:
                with self.remoto.sessao() as db:
                    return self._listar(db)
            except SQLAlchemyError as e:
                logger.warning(
                    "[Sync] Assinatura de %s perdeu o banco remoto, passando a usar o local: %s",
                    self.nome, e,
                )
                sync_fallback_total.labels(colecao=self.nome, operacao="assinatura").inc()
                assinatura.usando_local = True
        return self.listar_local()

    def _entregar(self, assinatura: Assinatura[T]) -> None:
        if not assinatura.ativa:
            return
        snapshot = self._snapshot(assinatura)
        try:
            assinatura.callback(snapshot)
        except Exception as e:
            logger.error("[Sync] Erro no callback de assinatura de %s: %s", self.nome, e)

    def _notificar(self) -> None:
        with self._lock:
            assinaturas = list(self._assinaturas)
        for assinatura in assinaturas:
            self._entregar(assinatura)

    def _ao_alternar_modo(self, offline: bool) -> None:
        """Derruba e refaz todas as assinaturas no backend do novo modo."""
        with self._lock:
            assinaturas = list(self._assinaturas)
        logger.info(
            "[Sync] Reassinando %s (%d assinaturas) no banco %s",
            self.nome, len(assinaturas), LOCAL if offline or self.remoto is None else REMOTO,
        )
        for assinatura in assinaturas:
            assinatura.usando_local = False
            self._entregar(assinatura)

    def fechar(self) -> None:
        """Cancela as assinaturas e desliga a coleção do flag de modo."""
        with self._lock:
            assinaturas = list(self._assinaturas)
        for assinatura in assinaturas:
            assinatura.cancelar()
        self.modo.remover(self._ao_alternar_modo)


def copiar_registro(registro):
    """Cópia desanexada de um model, para gravar o mesmo registro no outro banco."""
    mapper = registro.__class__.__mapper__
    return registro.__class__(**{c.key: getattr(registro, c.key) for c in mapper.column_attrs})
