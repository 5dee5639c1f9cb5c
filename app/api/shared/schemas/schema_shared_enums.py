from enum import Enum


class StatusPedidoEnum(str, Enum):
    """
    Status do pedido no quadro da cozinha.

    CONFIRMED -> KITCHEN -> DELIVERY -> COMPLETED, com CANCELED e ARCHIVED
    como saídas laterais.
    """
    CONFIRMED = "CONFIRMED"
    KITCHEN = "KITCHEN"
    DELIVERY = "DELIVERY"
    COMPLETED = "COMPLETED"
    CANCELED = "CANCELED"
    ARCHIVED = "ARCHIVED"


class TipoPedidoEnum(str, Enum):
    DELIVERY = "DELIVERY"
    RETIRADA = "RETIRADA"


class MeioPagamentoEnum(str, Enum):
    DINHEIRO = "DINHEIRO"
    CREDITO = "CREDITO"
    DEBITO = "DEBITO"
    REFEICAO = "REFEICAO"
    PIX = "PIX"
    IFOOD = "IFOOD"
    FIADO = "FIADO"


class TipoDescontoEnum(str, Enum):
    FIXO = "FIXO"
    PERCENTUAL = "PERCENTUAL"


class RoleUsuarioEnum(str, Enum):
    ADMIN = "ADMIN"
    OPERATOR = "OPERATOR"


MOTIVOS_CANCELAMENTO = [
    "Teste",
    "Pedido Duplicado",
    "Cancelado pelo Cliente",
    "Cancelado pela Loja",
    "Golpe / Trote",
    "Loja Fechada",
    "Endereço fora da área",
    "Outros",
]
