from fastapi import Depends

from app.api.cadastros.services.dependencies import (
    get_cliente_service,
    get_funcionario_service,
    get_pedido_repository,
)
from app.api.cadastros.services.service_cliente import ClienteService
from app.api.cadastros.services.service_funcionario import FuncionarioService
from app.api.catalogo.services.dependencies import get_catalogo_service
from app.api.catalogo.services.service_catalogo import CatalogoService
from app.api.configuracoes.services.dependencies import get_configuracao_service
from app.api.configuracoes.services.service_configuracao import ConfiguracaoService
from app.api.estoque.services.dependencies import get_estoque_service
from app.api.estoque.services.service_estoque import EstoqueService
from app.api.pedidos.repositories.repo_pedidos import PedidoRepository
from app.api.pedidos.services.service_carrinho import CarrinhoService
from app.api.pedidos.services.service_pedido import PedidoService
from app.api.pedidos.services.service_pedido_kanban import KanbanService


def get_carrinho_service(
    config: ConfiguracaoService = Depends(get_configuracao_service),
    catalogo: CatalogoService = Depends(get_catalogo_service),
    estoque: EstoqueService = Depends(get_estoque_service),
) -> CarrinhoService:
    return CarrinhoService(config, catalogo, estoque)


def get_pedido_service(
    repo: PedidoRepository = Depends(get_pedido_repository),
    clientes: ClienteService = Depends(get_cliente_service),
    config: ConfiguracaoService = Depends(get_configuracao_service),
    funcionarios: FuncionarioService = Depends(get_funcionario_service),
    carrinho: CarrinhoService = Depends(get_carrinho_service),
) -> PedidoService:
    return PedidoService(repo, clientes, config, funcionarios, carrinho)


def get_kanban_service(
    repo: PedidoRepository = Depends(get_pedido_repository),
    funcionarios: FuncionarioService = Depends(get_funcionario_service),
) -> KanbanService:
    return KanbanService(repo, funcionarios)
