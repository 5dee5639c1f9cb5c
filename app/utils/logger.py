"""
Logger da aplicação.

Escreve no console e em arquivo rotativo (logs/app.log), lido pelo
endpoint de monitoramento.
"""
import logging
from logging.handlers import RotatingFileHandler

from app.config.settings import LOG_DIR, LOG_LEVEL

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _criar_logger() -> logging.Logger:
    log = logging.getLogger("pizzaria_pdv")
    if log.handlers:
        return log

    log.setLevel(LOG_LEVEL)
    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    log.addHandler(console)

    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        arquivo = RotatingFileHandler(
            LOG_DIR / "app.log", maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
        )
        arquivo.setFormatter(formatter)
        log.addHandler(arquivo)
    except OSError as e:
        log.warning(f"Não foi possível abrir o arquivo de log em {LOG_DIR}: {e}")

    log.propagate = False
    return log


logger = _criar_logger()
