from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from app.api.cadastros.repositories.repo_cliente import ClienteRepository
from app.api.cadastros.repositories.repo_funcionario import FuncionarioRepository
from app.api.cadastros.services.service_cliente import ClienteService
from app.api.cadastros.services.service_funcionario import FuncionarioService
from app.api.cadastros.services.service_usuario import UsuarioService
from app.api.configuracoes.services.dependencies import get_configuracao_service
from app.api.configuracoes.services.service_configuracao import ConfiguracaoService
from app.api.pedidos.repositories.repo_pedidos import PedidoRepository
from app.database.db_connection import backend_local, backend_remoto, get_db


@lru_cache
def get_cliente_repository() -> ClienteRepository:
    return ClienteRepository(backend_local, backend_remoto)


@lru_cache
def get_funcionario_repository() -> FuncionarioRepository:
    return FuncionarioRepository(backend_local, backend_remoto)


@lru_cache
def get_pedido_repository() -> PedidoRepository:
    return PedidoRepository(backend_local, backend_remoto)


def get_cliente_service(
    repo: ClienteRepository = Depends(get_cliente_repository),
    pedidos: PedidoRepository = Depends(get_pedido_repository),
) -> ClienteService:
    return ClienteService(repo, pedidos)


def get_funcionario_service(
    repo: FuncionarioRepository = Depends(get_funcionario_repository),
    config: ConfiguracaoService = Depends(get_configuracao_service),
) -> FuncionarioService:
    return FuncionarioService(repo, config)


def get_usuario_service(db: Session = Depends(get_db)) -> UsuarioService:
    return UsuarioService(db)
