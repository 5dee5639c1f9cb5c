"""
Router principal do bounded context de Pedidos: carrinho do caixa,
pedidos e quadro da cozinha.
"""
from fastapi import APIRouter

from app.api.pedidos.router.router_carrinho import router as router_carrinho
from app.api.pedidos.router.router_kanban import router as router_kanban
from app.api.pedidos.router.router_pedidos import router as router_pedidos

api_pedidos = APIRouter(
    tags=["API - Pedidos"]
)

# kanban e carrinho antes de /api/pedidos/{numero}
api_pedidos.include_router(router_carrinho)
api_pedidos.include_router(router_kanban)
api_pedidos.include_router(router_pedidos)
