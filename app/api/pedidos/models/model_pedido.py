# app/api/pedidos/models/model_pedido.py
from sqlalchemy import Column, DateTime, Enum as SAEnum, Index, Integer, JSON, Numeric, String

from app.api.shared.schemas.schema_shared_enums import (
    MeioPagamentoEnum,
    StatusPedidoEnum,
    TipoPedidoEnum,
)
from app.database.db_connection import Base
from app.utils.database_utils import now_trimmed


class PedidoModel(Base):
    """
    Pedido gravado no banco remoto ou no local (mesma tabela nos dois).

    `numero` é o número legível (1001, 1002, ...) e também a chave primária,
    para que o espelho local use a mesma identidade do remoto.
    Cliente e itens são snapshots do momento da criação.
    """
    __tablename__ = "pedidos"

    numero = Column(Integer, primary_key=True, autoincrement=False)
    criado_em = Column(DateTime, nullable=False, default=now_trimmed)
    prazo = Column(DateTime, nullable=True)

    tipo = Column(SAEnum(TipoPedidoEnum, name="pedido_tipo_enum", native_enum=False, length=20), nullable=False)
    status = Column(
        SAEnum(StatusPedidoEnum, name="pedido_status_enum", native_enum=False, length=20),
        nullable=False,
        default=StatusPedidoEnum.CONFIRMED,
    )

    cliente = Column(JSON, nullable=False)
    cliente_telefone = Column(String(30), nullable=True)
    itens = Column(JSON, nullable=False)

    subtotal = Column(Numeric(18, 2), nullable=False, default=0)
    desconto = Column(Numeric(18, 2), nullable=False, default=0)
    taxa_entrega = Column(Numeric(18, 2), nullable=False, default=0)
    total = Column(Numeric(18, 2), nullable=False, default=0)

    meio_pagamento = Column(
        SAEnum(MeioPagamentoEnum, name="pedido_meio_pagamento_enum", native_enum=False, length=20),
        nullable=False,
    )
    troco_para = Column(Numeric(18, 2), nullable=True)

    motivo_cancelamento = Column(String(120), nullable=True)
    cancelado_por = Column(String(120), nullable=True)
    cancelado_em = Column(DateTime, nullable=True)

    entregador = Column(String(120), nullable=True)
    operador = Column(String(120), nullable=True)
    origem = Column(String(10), nullable=True)
    atualizado_em = Column(DateTime, nullable=True, onupdate=now_trimmed)

    __table_args__ = (
        Index("ix_pedidos_criado_em", "criado_em"),
        Index("ix_pedidos_cliente_telefone", "cliente_telefone"),
    )

    def __repr__(self):
        return f"<Pedido numero={self.numero} status={self.status} total={self.total}>"


class ContadorModel(Base):
    """Contador transacional do número do pedido (linha lida com FOR UPDATE)."""
    __tablename__ = "contadores"

    nome = Column(String(50), primary_key=True)
    valor = Column(Integer, nullable=False)
