from .service_catalogo import CatalogoService, max_sabores, preco_pizza
from .service_disponibilidade import verificar_disponibilidade

__all__ = [
    "CatalogoService",
    "max_sabores",
    "preco_pizza",
    "verificar_disponibilidade",
]
