from typing import List

from fastapi import APIRouter, Depends, status
from fastapi.responses import Response

from app.api.cadastros.models.model_usuario import UsuarioModel
from app.api.cadastros.schemas.schema_usuario import UsuarioCreate, UsuarioResponse
from app.api.cadastros.services.dependencies import get_usuario_service
from app.api.cadastros.services.service_usuario import UsuarioService
from app.core.admin_dependencies import require_admin

router = APIRouter(
    prefix="/api/cadastros/usuarios",
    tags=["Cadastros - Usuários"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=List[UsuarioResponse])
def listar_usuarios(svc: UsuarioService = Depends(get_usuario_service)):
    return svc.list()


@router.post("", response_model=UsuarioResponse, status_code=status.HTTP_201_CREATED)
def criar_usuario(payload: UsuarioCreate, svc: UsuarioService = Depends(get_usuario_service)):
    return svc.create(payload)


@router.delete("/{usuario_id}", status_code=status.HTTP_204_NO_CONTENT)
def deletar_usuario(
    usuario_id: str,
    current_user: UsuarioModel = Depends(require_admin),
    svc: UsuarioService = Depends(get_usuario_service),
):
    svc.delete(usuario_id, ator=current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
