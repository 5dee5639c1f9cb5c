from typing import Iterable, Optional, Tuple

from app.api.catalogo.schemas.schema_catalogo import Produto


def verificar_disponibilidade(produto: Produto, bloqueados: Iterable[str]) -> Tuple[bool, Optional[str]]:
    """
    Retorna (disponivel, motivo).

    O próprio sabor é checado antes dos ingredientes; o primeiro nome
    bloqueado encontrado é o motivo.
    """
    bloqueados = set(bloqueados)
    if produto.sabor in bloqueados:
        return False, produto.sabor
    for ingrediente in produto.ingredientes:
        if ingrediente in bloqueados:
            return False, ingrediente
    return True, None
