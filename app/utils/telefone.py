import re
from typing import Optional


def normalizar_telefone(telefone: Optional[str]) -> Optional[str]:
    """
    Normaliza o telefone do cliente para a forma usada como chave do cadastro.

    - Remove máscara: espaços, parênteses, hífen, '+' etc.
    - Remove prefixo internacional "00" (ex: 0055...).
    - Remove o código do país (55) quando sobra DDD + 8 ou 9 dígitos.

    Números locais sem DDD ficam exatamente como digitados (só os dígitos).
    """
    if telefone is None:
        return None

    telefone_limpo = re.sub(r"[^\d]", "", telefone)
    if not telefone_limpo:
        return telefone_limpo

    # Ex.: 0055...
    if telefone_limpo.startswith("00"):
        telefone_limpo = telefone_limpo[2:]

    if telefone_limpo.startswith("55") and len(telefone_limpo) in (12, 13):
        return telefone_limpo[2:]

    return telefone_limpo
