"""Cardápio da pizzaria."""
from typing import Dict, List, Optional, Tuple

from app.api.catalogo.schemas.schema_catalogo import Produto, TamanhoPizza

TAMANHOS_PIZZA = (4, 8, 12)

PIZZAS_SALGADAS = "Pizzas Salgadas"
PIZZAS_DOCES = "Pizzas Doces"
BEBIDAS = "Bebidas"
PORCOES = "Porções"


def _pizza(categoria: str, sabor: str, ingredientes: List[str], precos: Tuple[float, float, float]) -> Produto:
    return Produto(
        categoria=categoria,
        tipo="Pizza",
        sabor=sabor,
        ingredientes=ingredientes,
        tamanhos=[TamanhoPizza(pedacos=p, preco=v) for p, v in zip(TAMANHOS_PIZZA, precos)],
    )


def _item(categoria: str, tipo: str, sabor: str, preco: float, ingredientes: Optional[List[str]] = None) -> Produto:
    return Produto(categoria=categoria, tipo=tipo, sabor=sabor, preco=preco, ingredientes=ingredientes or [])


PRODUTOS: List[Produto] = [
    _pizza(PIZZAS_SALGADAS, "Mussarela", ["Molho de tomate", "Mussarela", "Orégano"], (30.0, 45.0, 60.0)),
    _pizza(PIZZAS_SALGADAS, "Calabresa", ["Molho de tomate", "Mussarela", "Calabresa", "Cebola"], (32.0, 48.0, 64.0)),
    _pizza(PIZZAS_SALGADAS, "Portuguesa", ["Molho de tomate", "Mussarela", "Presunto", "Ovo", "Cebola", "Ervilha", "Azeitona"], (36.0, 54.0, 72.0)),
    _pizza(PIZZAS_SALGADAS, "Frango com Catupiry", ["Molho de tomate", "Frango", "Catupiry"], (36.0, 54.0, 72.0)),
    _pizza(PIZZAS_SALGADAS, "Marguerita", ["Molho de tomate", "Mussarela", "Tomate", "Manjericão"], (34.0, 50.0, 66.0)),
    _pizza(PIZZAS_SALGADAS, "Quatro Queijos", ["Molho de tomate", "Mussarela", "Provolone", "Parmesão", "Catupiry"], (38.0, 56.0, 74.0)),
    _pizza(PIZZAS_SALGADAS, "Bacon", ["Molho de tomate", "Mussarela", "Bacon"], (35.0, 52.0, 69.0)),
    _pizza(PIZZAS_SALGADAS, "Atum", ["Molho de tomate", "Mussarela", "Atum", "Cebola"], (38.0, 56.0, 74.0)),
    _pizza(PIZZAS_SALGADAS, "Lombo Canadense", ["Molho de tomate", "Mussarela", "Lombo", "Catupiry"], (38.0, 56.0, 74.0)),
    _pizza(PIZZAS_SALGADAS, "Napolitana", ["Molho de tomate", "Mussarela", "Tomate", "Parmesão"], (34.0, 50.0, 66.0)),
    _pizza(PIZZAS_DOCES, "Chocolate", ["Chocolate ao leite", "Granulado"], (32.0, 46.0, 60.0)),
    _pizza(PIZZAS_DOCES, "Romeu e Julieta", ["Mussarela", "Goiabada"], (32.0, 46.0, 60.0)),
    _pizza(PIZZAS_DOCES, "Banana com Canela", ["Banana", "Açúcar", "Canela", "Leite condensado"], (30.0, 44.0, 58.0)),
    _pizza(PIZZAS_DOCES, "Prestígio", ["Chocolate ao leite", "Coco ralado"], (34.0, 48.0, 62.0)),
    _item(BEBIDAS, "Refrigerante", "Coca-Cola 2L", 14.0),
    _item(BEBIDAS, "Refrigerante", "Guaraná 2L", 12.0),
    _item(BEBIDAS, "Refrigerante", "Coca-Cola Lata", 6.0),
    _item(BEBIDAS, "Suco", "Suco de Laranja 1L", 12.0),
    _item(BEBIDAS, "Água", "Água sem Gás", 4.0),
    _item(PORCOES, "Porção", "Batata Frita", 25.0, ["Batata"]),
    _item(PORCOES, "Porção", "Calabresa Acebolada", 30.0, ["Calabresa", "Cebola"]),
    _item(PORCOES, "Porção", "Pão de Alho", 18.0, ["Pão", "Alho", "Mussarela"]),
]

CATEGORIAS: List[str] = list(dict.fromkeys(p.categoria for p in PRODUTOS))

PRODUTOS_POR_SABOR: Dict[str, Produto] = {p.sabor: p for p in PRODUTOS}
