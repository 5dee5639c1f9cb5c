from fastapi import Depends
from sqlalchemy.orm import Session

from app.api.configuracoes.services.service_configuracao import ConfiguracaoService
from app.database.db_connection import get_db


def get_configuracao_service(db: Session = Depends(get_db)) -> ConfiguracaoService:
    return ConfiguracaoService(db)
