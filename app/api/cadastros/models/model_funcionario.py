from sqlalchemy import Boolean, Column, DateTime, Numeric, String

from app.api.cadastros.models.model_cliente import novo_id
from app.database.db_connection import Base
from app.utils.database_utils import now_trimmed


class FuncionarioModel(Base):
    __tablename__ = "funcionarios"

    id = Column(String(32), primary_key=True, default=novo_id)
    nome = Column(String(100), nullable=False)
    cargo = Column(String(60), nullable=False)
    # valor pago por período trabalhado (entregadores recebem pelas taxas, valor 0)
    valor_periodo = Column(Numeric(18, 2), nullable=False, default=0)
    entregador = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, default=now_trimmed, nullable=False)
