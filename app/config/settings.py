import os
from dotenv import load_dotenv
from pathlib import Path

# Carrega o .env manualmente se estiver fora do Docker
if not os.getenv("RUNNING_IN_DOCKER"):
    dotenv_path = Path(__file__).resolve().parents[2] / ".env"
    load_dotenv(dotenv_path=dotenv_path)

BASE_DIR = Path(__file__).resolve().parents[2]

# Banco remoto (PostgreSQL). Se incompleto, o sistema opera somente com o banco local.
DB_CONFIG = {
    'database': os.getenv('DB_NAME'),
    'user': os.getenv('DB_USER'),
    'password': os.getenv('DB_PASSWORD'),
    'host': os.getenv('DB_HOST'),
    'port': int(os.getenv('DB_PORT', 5432)),
}

# SSL do banco (opcional)
DB_SSL_MODE = os.getenv('DB_SSL_MODE')  # ex.: require, verify-ca, verify-full

# Tempo máximo (segundos) de conexão/consulta no banco remoto antes de cair para o local
REMOTE_TIMEOUT_SECONDS = int(os.getenv("REMOTE_TIMEOUT_SECONDS", 3))

# Banco local (SQLite) usado como fallback offline e espelho dos dados remotos
LOCAL_DB_PATH = os.getenv("LOCAL_DB_PATH", str(BASE_DIR / "data" / "pdv_local.db"))

# Inicia o processo em modo offline forçado
FORCE_OFFLINE = os.getenv("FORCE_OFFLINE", "false").lower() in ("1", "true", "yes")

# Fuso usado para "hoje", prazos e relatórios
TIMEZONE = os.getenv("TIMEZONE", "America/Sao_Paulo")

# Pedidos
PEDIDO_NUMERO_INICIAL = int(os.getenv("PEDIDO_NUMERO_INICIAL", 1001))
SLA_ENTREGA_MINUTOS = int(os.getenv("SLA_ENTREGA_MINUTOS", 50))
SLA_RETIRADA_MINUTOS = int(os.getenv("SLA_RETIRADA_MINUTOS", 30))

# JWT / Segurança
SECRET_KEY = os.getenv("SECRET_KEY", "pizzaria-pdv-dev-secret")
ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60))

# Usuário administrador criado quando não há nenhum usuário cadastrado
DEFAULT_ADMIN_USERNAME = os.getenv("DEFAULT_ADMIN_USERNAME", "admin")
DEFAULT_ADMIN_PASSWORD = os.getenv("DEFAULT_ADMIN_PASSWORD", "admin")
DEFAULT_ADMIN_NAME = os.getenv("DEFAULT_ADMIN_NAME", "Administrador Padrão")

# CORS
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]
CORS_ALLOW_ALL = os.getenv("CORS_ALLOW_ALL", "false").lower() in ("1", "true", "yes")

# FastAPI / App
BASE_URL = os.getenv("BASE_URL", "")
ENABLE_DOCS = os.getenv("ENABLE_DOCS", "true").lower() in ("1", "true", "yes")

# Logs
LOG_DIR = Path(os.getenv("LOG_DIR", str(BASE_DIR / "logs")))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
