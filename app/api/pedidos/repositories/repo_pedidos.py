from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.api.pedidos.models.model_pedido import ContadorModel, PedidoModel
from app.api.shared.schemas.schema_shared_enums import StatusPedidoEnum
from app.config.settings import PEDIDO_NUMERO_INICIAL
from app.database.sync.backends import LOCAL, REMOTO
from app.database.sync.colecao import ColecaoSincronizada, copiar_registro
from app.utils.database_utils import now_trimmed
from app.utils.prometheus_metrics import pedidos_criados_total

CONTADOR_PEDIDOS = "pedidos"
LIMITE_SNAPSHOT = 500


class PedidoRepository(ColecaoSincronizada[PedidoModel]):
    """Pedidos no banco remoto com fallback local."""

    nome = "pedidos"

    def _listar(self, db: Session) -> List[PedidoModel]:
        return (
            db.query(PedidoModel)
            .order_by(PedidoModel.criado_em.desc(), PedidoModel.numero.desc())
            .limit(LIMITE_SNAPSHOT)
            .all()
        )

    # ------------- Número do pedido -------------
    def _maior_numero_local(self) -> int:
        with self.local.sessao() as db:
            return self._maior_numero(db)

    @staticmethod
    def _maior_numero(db: Session) -> int:
        maior = db.query(func.max(PedidoModel.numero)).scalar()
        return maior if maior is not None else PEDIDO_NUMERO_INICIAL - 1

    @staticmethod
    def _proximo_numero_remoto(db: Session, piso: int) -> int:
        """
        Incrementa o contador dentro da transação do insert.

        `piso` é o maior número já usado no caixa; pedidos criados offline
        não voltam a ser emitidos quando o remoto responde de novo.
        """
        contador = (
            db.query(ContadorModel)
            .filter(ContadorModel.nome == CONTADOR_PEDIDOS)
            .with_for_update()
            .first()
        )
        if contador is None:
            numero = max(PEDIDO_NUMERO_INICIAL, piso + 1)
            db.add(ContadorModel(nome=CONTADOR_PEDIDOS, valor=numero))
        else:
            numero = max(contador.valor + 1, piso + 1)
            contador.valor = numero
        return numero

    # ------------- Escritas -------------
    def criar(self, dados: Dict[str, Any]) -> PedidoModel:
        """Grava o pedido e retorna o registro com `numero` e `origem` preenchidos."""

        def remota(db: Session) -> PedidoModel:
            numero = self._proximo_numero_remoto(db, self._maior_numero_local())
            pedido = PedidoModel(numero=numero, origem=REMOTO, **dados)
            db.add(pedido)
            db.flush()
            return pedido

        def local(db: Session) -> PedidoModel:
            pedido = PedidoModel(numero=self._maior_numero(db) + 1, origem=LOCAL, **dados)
            db.add(pedido)
            db.flush()
            return pedido

        pedido = self._executar("criar", remota, local, espelho=self._espelhar_pedido)
        pedidos_criados_total.labels(origem=pedido.origem).inc()
        return pedido

    def atualizar(self, numero: int, campos: Dict[str, Any]) -> Optional[PedidoModel]:
        """Atualiza status/metadados. Pedido ausente no remoto é procurado no local."""

        def aplicar(db: Session) -> Optional[PedidoModel]:
            pedido = db.get(PedidoModel, numero)
            if pedido is None:
                return None
            for campo, valor in campos.items():
                setattr(pedido, campo, valor)
            pedido.atualizado_em = now_trimmed()
            db.flush()
            return pedido

        return self._executar(
            "atualizar",
            aplicar,
            aplicar,
            espelho=self._espelhar_pedido,
            local_se_vazio=True,
        )

    def atualizar_status(self, numero: int, status: StatusPedidoEnum, **extras: Any) -> Optional[PedidoModel]:
        return self.atualizar(numero, {"status": status, **extras})

    @staticmethod
    def _espelhar_pedido(db: Session, pedido: Optional[PedidoModel]) -> None:
        if pedido is not None:
            db.merge(copiar_registro(pedido))

    # ------------- Leituras -------------
    def buscar(self, numero: int) -> Optional[PedidoModel]:
        return self._buscar("buscar", lambda db: db.get(PedidoModel, numero))

    def listar_por_telefone(self, telefone: str) -> List[PedidoModel]:
        def consulta(db: Session) -> List[PedidoModel]:
            return (
                db.query(PedidoModel)
                .filter(PedidoModel.cliente_telefone == telefone)
                .order_by(PedidoModel.criado_em.desc())
                .all()
            )

        return self._ler("listar_por_telefone", consulta)
