"""
Models do bounded context de Pedidos.
"""

from .model_pedido import ContadorModel, PedidoModel

__all__ = [
    "ContadorModel",
    "PedidoModel",
]
