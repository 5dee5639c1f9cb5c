from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.api.catalogo.schemas.schema_catalogo import (
    CatalogoResponse,
    PrecoPizzaRequest,
    PrecoPizzaResponse,
)
from app.api.catalogo.services.dependencies import get_catalogo_service
from app.api.catalogo.services.service_catalogo import CatalogoService, max_sabores
from app.api.estoque.services.dependencies import get_estoque_service
from app.api.estoque.services.service_estoque import EstoqueService
from app.core.admin_dependencies import get_current_user

router = APIRouter(
    prefix="/api/catalogo",
    tags=["Catálogo"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=CatalogoResponse)
def listar_catalogo(
    categoria: Optional[str] = Query(None, description="Filtra por categoria"),
    busca: Optional[str] = Query(None, description="Sabor, tipo ou ingrediente"),
    preco_max: Optional[float] = Query(None, ge=0, description="Preço máximo (item ou menor tamanho)"),
    catalogo: CatalogoService = Depends(get_catalogo_service),
    estoque: EstoqueService = Depends(get_estoque_service),
):
    """Cardápio com a disponibilidade de cada produto conforme os itens bloqueados."""
    return catalogo.listar_com_disponibilidade(estoque.bloqueados(), categoria, busca, preco_max)


@router.get("/categorias", response_model=List[str])
def listar_categorias(catalogo: CatalogoService = Depends(get_catalogo_service)):
    return catalogo.categorias()


@router.post("/preco-pizza", response_model=PrecoPizzaResponse)
def calcular_preco_pizza(
    payload: PrecoPizzaRequest,
    catalogo: CatalogoService = Depends(get_catalogo_service),
):
    return PrecoPizzaResponse(
        sabores=payload.sabores,
        tamanho=payload.tamanho,
        max_sabores=max_sabores(payload.tamanho),
        preco=catalogo.preco_pizza(payload.sabores, payload.tamanho),
    )
