from fastapi import APIRouter, Depends

from app.api.estoque.schemas.schema_estoque import (
    BloquearItemRequest,
    EstoqueResponse,
    ItensBloqueaveisResponse,
)
from app.api.estoque.services.dependencies import get_estoque_service
from app.api.estoque.services.service_estoque import EstoqueService
from app.core.admin_dependencies import get_current_user

router = APIRouter(
    prefix="/api/estoque",
    tags=["Estoque"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=EstoqueResponse)
def listar_bloqueados(svc: EstoqueService = Depends(get_estoque_service)):
    return svc.listar()


@router.get("/opcoes", response_model=ItensBloqueaveisResponse)
def listar_opcoes(svc: EstoqueService = Depends(get_estoque_service)):
    return svc.opcoes()


@router.post("/bloqueados", response_model=EstoqueResponse)
def bloquear_item(
    payload: BloquearItemRequest,
    svc: EstoqueService = Depends(get_estoque_service),
):
    return svc.bloquear(payload.nome)


@router.delete("/bloqueados/{nome}", response_model=EstoqueResponse)
def desbloquear_item(
    nome: str,
    svc: EstoqueService = Depends(get_estoque_service),
):
    return svc.desbloquear(nome)
