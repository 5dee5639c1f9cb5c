from typing import Any, Dict

from sqlalchemy.orm import Session

from app.api.configuracoes.models.model_configuracao import ConfiguracaoModel


class ConfiguracaoRepository:
    """Chaves persistidas só no banco local (não passam pela camada de sincronização)."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, chave: str, padrao: Any = None) -> Any:
        registro = self.db.get(ConfiguracaoModel, chave)
        return padrao if registro is None else registro.valor

    def get_all(self) -> Dict[str, Any]:
        return {r.chave: r.valor for r in self.db.query(ConfiguracaoModel).all()}

    def set(self, chave: str, valor: Any) -> Any:
        registro = self.db.get(ConfiguracaoModel, chave)
        if registro is None:
            registro = ConfiguracaoModel(chave=chave, valor=valor)
            self.db.add(registro)
        else:
            registro.valor = valor
        self.db.commit()
        return valor

    def delete(self, chave: str) -> None:
        registro = self.db.get(ConfiguracaoModel, chave)
        if registro is not None:
            self.db.delete(registro)
            self.db.commit()
