from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session, sessionmaker


class BackendSql:
    """Um dos dois armazenamentos intercambiáveis (remoto ou local)."""

    def __init__(self, nome: str, session_factory: sessionmaker):
        self.nome = nome
        self.session_factory = session_factory

    @contextmanager
    def sessao(self) -> Iterator[Session]:
        db = self.session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def __repr__(self) -> str:
        return f"BackendSql({self.nome!r})"


REMOTO = "remoto"
LOCAL = "local"
