from functools import lru_cache

from fastapi import Depends

from app.api.catalogo.services.dependencies import get_catalogo_service
from app.api.catalogo.services.service_catalogo import CatalogoService
from app.api.estoque.repositories.repo_estoque import EstoqueRepository
from app.api.estoque.services.service_estoque import EstoqueService
from app.database.db_connection import backend_local, backend_remoto


@lru_cache
def get_estoque_repository() -> EstoqueRepository:
    # uma instância por processo: as assinaturas vivem nela
    return EstoqueRepository(backend_local, backend_remoto)


def get_estoque_service(
    repo: EstoqueRepository = Depends(get_estoque_repository),
    catalogo: CatalogoService = Depends(get_catalogo_service),
) -> EstoqueService:
    return EstoqueService(repo, catalogo)
