from sqlalchemy import Column, DateTime, String

from app.database.db_connection import Base
from app.utils.database_utils import now_trimmed


class ItemBloqueadoModel(Base):
    """Ingrediente ou produto em falta. Existir na tabela = bloqueado."""
    __tablename__ = "itens_bloqueados"

    nome = Column(String(120), primary_key=True)
    bloqueado_em = Column(DateTime, nullable=False, default=now_trimmed)
