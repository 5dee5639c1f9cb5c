from typing import List

from fastapi import APIRouter, Depends, status
from fastapi.responses import Response

from app.api.cadastros.schemas.schema_funcionario import (
    EscalaAtivaResponse,
    EscalaPeriodosRequest,
    FuncionarioCreate,
    FuncionarioOut,
)
from app.api.cadastros.services.dependencies import get_funcionario_service
from app.api.cadastros.services.service_funcionario import FuncionarioService
from app.core.admin_dependencies import get_current_user
from app.utils.logger import logger

router = APIRouter(
    prefix="/api/cadastros/funcionarios",
    tags=["Cadastros - Equipe"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=List[FuncionarioOut])
def listar_funcionarios(svc: FuncionarioService = Depends(get_funcionario_service)):
    return svc.list()


@router.post("", response_model=FuncionarioOut, status_code=status.HTTP_201_CREATED)
def criar_funcionario(
    payload: FuncionarioCreate,
    svc: FuncionarioService = Depends(get_funcionario_service),
):
    logger.info(f"[Equipe] Criar - {payload.nome}")
    return svc.create(payload)


@router.delete("/{funcionario_id}", status_code=status.HTTP_204_NO_CONTENT)
def deletar_funcionario(
    funcionario_id: str,
    svc: FuncionarioService = Depends(get_funcionario_service),
):
    svc.delete(funcionario_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ------------- Escala do dia -------------
@router.get("/escala", response_model=EscalaAtivaResponse)
def obter_escala(svc: FuncionarioService = Depends(get_funcionario_service)):
    return svc.escala_ativa()


@router.get("/escala/entregadores", response_model=List[FuncionarioOut])
def listar_entregadores_escalados(svc: FuncionarioService = Depends(get_funcionario_service)):
    return svc.entregadores_escalados()


@router.post("/escala/{funcionario_id}", response_model=EscalaAtivaResponse)
def alternar_escala(
    funcionario_id: str,
    svc: FuncionarioService = Depends(get_funcionario_service),
):
    """Coloca na escala (2 períodos) ou tira dela."""
    svc.alternar_escala(funcionario_id)
    return svc.escala_ativa()


@router.put("/escala/{funcionario_id}", response_model=EscalaAtivaResponse)
def definir_periodos(
    funcionario_id: str,
    payload: EscalaPeriodosRequest,
    svc: FuncionarioService = Depends(get_funcionario_service),
):
    svc.definir_periodos(funcionario_id, payload.periodos)
    return svc.escala_ativa()
