"""
Schemas compartilhados entre diferentes domínios
"""

from app.api.shared.schemas.schema_shared_enums import (
    MOTIVOS_CANCELAMENTO,
    MeioPagamentoEnum,
    RoleUsuarioEnum,
    StatusPedidoEnum,
    TipoDescontoEnum,
    TipoPedidoEnum,
)

__all__ = [
    "MOTIVOS_CANCELAMENTO",
    "MeioPagamentoEnum",
    "RoleUsuarioEnum",
    "StatusPedidoEnum",
    "TipoDescontoEnum",
    "TipoPedidoEnum",
]
