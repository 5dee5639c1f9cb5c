from functools import lru_cache

from app.api.catalogo.services.service_catalogo import CatalogoService


@lru_cache
def get_catalogo_service() -> CatalogoService:
    return CatalogoService()
