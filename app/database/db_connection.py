# app/database/db_connection.py

import logging
from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

from ..config.settings import DB_CONFIG, DB_SSL_MODE, LOCAL_DB_PATH, REMOTE_TIMEOUT_SECONDS, TIMEZONE

# Base única para todos os models (mesmas tabelas no remoto e no local)
Base = declarative_base()

logger = logging.getLogger(__name__)


def montar_url_remota() -> Optional[str]:
    """Monta a URL do PostgreSQL remoto, ou None se a configuração estiver incompleta."""
    missing = [k for k in ('database', 'user', 'password', 'host', 'port') if not DB_CONFIG.get(k)]
    if missing:
        logger.warning(
            "Banco remoto não configurado (faltando: %s). Operando somente com o banco local.",
            ", ".join(missing),
        )
        return None
    ssl_query = f"?sslmode={DB_SSL_MODE}" if DB_SSL_MODE else ""
    return (
        f"postgresql://{DB_CONFIG['user']}:{DB_CONFIG['password']}"
        f"@{DB_CONFIG['host']}:{DB_CONFIG['port']}/{DB_CONFIG['database']}{ssl_query}"
    )


def criar_engine_remoto(url: Optional[str]) -> Optional[Engine]:
    if not url:
        return None
    if not url.startswith("postgresql"):
        return create_engine(url, pool_pre_ping=True)
    timeout_ms = REMOTE_TIMEOUT_SECONDS * 1000
    return create_engine(
        url,
        pool_pre_ping=True,
        connect_args={
            "connect_timeout": REMOTE_TIMEOUT_SECONDS,
            "options": f"-c timezone={TIMEZONE} -c statement_timeout={timeout_ms}",
        },
    )


def criar_engine_local(caminho: str) -> Engine:
    if caminho != ":memory:":
        Path(caminho).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(
        f"sqlite:///{caminho}",
        connect_args={"check_same_thread": False},
    )


def criar_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


engine_remoto = criar_engine_remoto(montar_url_remota())
engine_local = criar_engine_local(LOCAL_DB_PATH)

RemoteSessionLocal = criar_session_factory(engine_remoto) if engine_remoto is not None else None
LocalSessionLocal = criar_session_factory(engine_local)


def get_db():
    """Sessão do banco local para repositórios que não sincronizam (configurações, usuários)."""
    db = LocalSessionLocal()
    try:
        yield db
    finally:
        db.close()


from app.database.sync.backends import BackendSql, LOCAL, REMOTO  # noqa: E402

backend_local = BackendSql(LOCAL, LocalSessionLocal)
backend_remoto = BackendSql(REMOTO, RemoteSessionLocal) if RemoteSessionLocal is not None else None
