from app.api.configuracoes.models.model_configuracao import ConfiguracaoModel

__all__ = ["ConfiguracaoModel"]
