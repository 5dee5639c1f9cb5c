from sqlalchemy import Column, DateTime, JSON, String

from app.database.db_connection import Base
from app.utils.database_utils import now_trimmed


class ConfiguracaoModel(Base):
    """Chave/valor persistido somente no banco local do caixa."""
    __tablename__ = "configuracoes"

    chave = Column(String(60), primary_key=True)
    valor = Column(JSON, nullable=True)
    atualizado_em = Column(DateTime, nullable=False, default=now_trimmed, onupdate=now_trimmed)
