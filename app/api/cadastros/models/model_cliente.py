from uuid import uuid4

from sqlalchemy import Column, DateTime, Index, Integer, Numeric, String

from app.database.db_connection import Base
from app.utils.database_utils import now_trimmed


def novo_id() -> str:
    return uuid4().hex


class ClienteModel(Base):
    __tablename__ = "clientes"
    __table_args__ = (
        Index("idx_clientes_nome", "nome"),
    )

    # id gerado na aplicação: o mesmo registro tem a mesma chave no remoto e no local
    id = Column(String(32), primary_key=True, default=novo_id)
    telefone = Column(String(20), nullable=False, unique=True)
    nome = Column(String(100), nullable=False)
    endereco = Column(String(255), nullable=True)
    bairro = Column(String(100), nullable=True)
    complemento = Column(String(100), nullable=True)

    total_pedidos = Column(Integer, nullable=False, default=0)
    total_gasto = Column(Numeric(18, 2), nullable=False, default=0)
    ultimo_pedido_em = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=now_trimmed, nullable=False)
    updated_at = Column(DateTime, default=now_trimmed, onupdate=now_trimmed, nullable=False)
