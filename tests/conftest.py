import os
import tempfile

import pytest

# Banco local e logs em diretório temporário; sem banco remoto configurado
_TMP = tempfile.mkdtemp(prefix="pdv_tests_")
os.environ["RUNNING_IN_DOCKER"] = "1"
os.environ["LOCAL_DB_PATH"] = os.path.join(_TMP, "pdv_local.db")
os.environ["LOG_DIR"] = os.path.join(_TMP, "logs")
os.environ["FORCE_OFFLINE"] = "false"
for _var in ("DB_NAME", "DB_USER", "DB_PASSWORD", "DB_HOST"):
    os.environ.pop(_var, None)

from sqlalchemy import create_engine  # noqa: E402

from app.database.db_connection import Base, criar_session_factory  # noqa: E402
from app.database.sync.backends import BackendSql, LOCAL, REMOTO  # noqa: E402
from app.database.sync.modo_offline import ModoOffline  # noqa: E402
from app.database.init_db import importar_models  # noqa: E402

importar_models()


def _backend_sqlite(nome: str, caminho: str) -> BackendSql:
    engine = create_engine(f"sqlite:///{caminho}", connect_args={"check_same_thread": False})
    Base.metadata.create_all(bind=engine)
    return BackendSql(nome, criar_session_factory(engine))


@pytest.fixture
def modo():
    return ModoOffline(False)


@pytest.fixture
def local(tmp_path):
    return _backend_sqlite(LOCAL, str(tmp_path / "local.db"))


@pytest.fixture
def remoto(tmp_path):
    return _backend_sqlite(REMOTO, str(tmp_path / "remoto.db"))


@pytest.fixture
def remoto_fora_do_ar(tmp_path):
    """Remoto cujo arquivo não pode ser aberto: toda operação levanta OperationalError."""
    caminho = tmp_path / "nao_existe" / "remoto.db"
    engine = create_engine(f"sqlite:///{caminho}")
    return BackendSql(REMOTO, criar_session_factory(engine))


@pytest.fixture
def db_local(local):
    db = local.session_factory()
    try:
        yield db
    finally:
        db.close()
