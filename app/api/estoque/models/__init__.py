from app.api.estoque.models.model_item_bloqueado import ItemBloqueadoModel

__all__ = ["ItemBloqueadoModel"]
