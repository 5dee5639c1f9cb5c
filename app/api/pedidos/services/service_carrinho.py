from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional
from uuid import uuid4

from app.api.catalogo.schemas.schema_catalogo import Produto
from app.api.catalogo.services.service_catalogo import CatalogoService
from app.api.catalogo.services.service_disponibilidade import verificar_disponibilidade
from app.api.configuracoes.services.service_configuracao import ConfiguracaoService
from app.api.estoque.services.service_estoque import EstoqueService
from app.api.pedidos.models.model_pedido import PedidoModel
from app.api.pedidos.schemas.schema_carrinho import (
    AdicionarItemRequest,
    Carrinho,
    CarrinhoResponse,
    ClientePedido,
    DadosCarrinhoRequest,
    Desconto,
    ItemCarrinho,
    TotaisCarrinho,
)
from app.api.shared.schemas.schema_shared_enums import (
    MeioPagamentoEnum,
    TipoDescontoEnum,
    TipoPedidoEnum,
)
from app.core.exceptions import RegistroNaoEncontradoError, ValidacaoPedidoError

CENTAVOS = Decimal("0.01")


def _dec(valor) -> Decimal:
    return Decimal(str(valor or 0))


def _money(valor: Decimal) -> float:
    return float(valor.quantize(CENTAVOS, rounding=ROUND_HALF_UP))


# ---------------------------------------------------------------------- #
# Linhas do carrinho
# ---------------------------------------------------------------------- #
def adicionar_item(
    itens: List[ItemCarrinho],
    produto: Produto,
    preco: float,
    tamanho: Optional[int] = None,
    sabores: Optional[List[Produto]] = None,
    observacao: str = "",
) -> ItemCarrinho:
    """Soma 1 na linha equivalente ou cria uma linha nova com quantidade 1."""
    novo = ItemCarrinho(
        produto=produto,
        sabores=sabores or [],
        tamanho=tamanho,
        preco=preco,
        observacao=observacao or "",
    )
    for item in itens:
        if item.chave() == novo.chave():
            item.quantidade += 1
            return item
    itens.append(novo)
    return novo


def _localizar(itens: List[ItemCarrinho], item_id: str) -> ItemCarrinho:
    for item in itens:
        if item.id == item_id:
            return item
    raise RegistroNaoEncontradoError("Item não está no carrinho")


def alterar_quantidade(itens: List[ItemCarrinho], item_id: str, quantidade: int) -> ItemCarrinho:
    item = _localizar(itens, item_id)
    item.quantidade = max(1, quantidade)
    return item


def remover_item(itens: List[ItemCarrinho], item_id: str) -> None:
    itens.remove(_localizar(itens, item_id))


def alterar_observacao(itens: List[ItemCarrinho], item_id: str, observacao: str) -> ItemCarrinho:
    """Se a nova observação deixar a linha igual a outra, as duas são unidas."""
    item = _localizar(itens, item_id)
    item.observacao = observacao or ""
    for outro in itens:
        if outro is not item and outro.chave() == item.chave():
            outro.quantidade += item.quantidade
            itens.remove(item)
            return outro
    return item


# ---------------------------------------------------------------------- #
# Totais
# ---------------------------------------------------------------------- #
def calcular_subtotal(itens: List[ItemCarrinho]) -> Decimal:
    return sum((_dec(i.preco) * i.quantidade for i in itens), Decimal("0"))


def calcular_desconto(subtotal, desconto: Optional[Desconto]) -> Decimal:
    """Fixo limitado ao subtotal; percentual limitado a 100 %. Negativo vale 0."""
    subtotal = _dec(subtotal)
    if desconto is None:
        return Decimal("0")
    valor = max(Decimal("0"), _dec(desconto.valor))
    if desconto.tipo == TipoDescontoEnum.PERCENTUAL:
        return subtotal * min(valor, Decimal("100")) / Decimal("100")
    return min(valor, subtotal)


def calcular_totais(
    itens: List[ItemCarrinho],
    desconto: Optional[Desconto],
    taxa_entrega,
    tipo: TipoPedidoEnum,
) -> TotaisCarrinho:
    subtotal = calcular_subtotal(itens)
    valor_desconto = calcular_desconto(subtotal, desconto)
    taxa = Decimal("0") if tipo == TipoPedidoEnum.RETIRADA else max(Decimal("0"), _dec(taxa_entrega))
    total = max(Decimal("0"), subtotal - valor_desconto + taxa)
    return TotaisCarrinho(
        subtotal=_money(subtotal),
        desconto=_money(valor_desconto),
        taxa_entrega=_money(taxa),
        total=_money(total),
    )


def validar(
    carrinho: Carrinho,
    totais: TotaisCarrinho,
    loja_aberta: bool,
    exigir_escala: bool,
    total_escalados: int,
) -> List[str]:
    """Lista todas as pendências do pedido (vazia = pode enviar)."""
    erros = []
    if not loja_aberta:
        erros.append("A loja está fechada")
    if exigir_escala and total_escalados == 0:
        erros.append("Nenhum funcionário na escala de hoje")
    if not carrinho.itens:
        erros.append("O carrinho está vazio")

    cliente = carrinho.cliente
    if not cliente.nome.strip():
        erros.append("Informe o nome do cliente")
    if not cliente.telefone.strip():
        erros.append("Informe o telefone do cliente")

    if carrinho.tipo == TipoPedidoEnum.DELIVERY:
        if not cliente.endereco.strip():
            erros.append("Informe o endereço de entrega")
        if not cliente.bairro.strip():
            erros.append("Informe o bairro")
        if _dec(carrinho.taxa_entrega) <= 0:
            erros.append("Informe a taxa de entrega")

    if carrinho.meio_pagamento is None:
        erros.append("Selecione a forma de pagamento")
    elif carrinho.meio_pagamento == MeioPagamentoEnum.DINHEIRO:
        if carrinho.troco_para is None:
            erros.append("Informe o valor para troco")
        elif _dec(carrinho.troco_para) < _dec(totais.total):
            erros.append("O valor para troco é menor que o total do pedido")
    return erros


def produtos_indisponiveis(produtos: Iterable[Produto], bloqueados: Iterable[str]) -> List[str]:
    """Uma mensagem por produto bloqueado (pelo sabor ou por um ingrediente)."""
    bloqueados = set(bloqueados)
    erros = []
    for produto in produtos:
        disponivel, motivo = verificar_disponibilidade(produto, bloqueados)
        if disponivel:
            continue
        if motivo == produto.sabor:
            mensagem = f"{produto.sabor} está indisponível"
        else:
            mensagem = f"{produto.sabor} está indisponível (sem {motivo})"
        if mensagem not in erros:
            erros.append(mensagem)
    return erros


# ---------------------------------------------------------------------- #
# Rascunho persistido
# ---------------------------------------------------------------------- #
class CarrinhoService:
    """Carrinho do caixa, salvo no banco local a cada alteração."""

    def __init__(
        self,
        config: ConfiguracaoService,
        catalogo: CatalogoService,
        estoque: Optional[EstoqueService] = None,
    ):
        self.config = config
        self.catalogo = catalogo
        self.estoque = estoque

    def indisponiveis(self, itens: Iterable[ItemCarrinho]) -> List[str]:
        """Produtos do carrinho (sabores inclusos) bloqueados no estoque agora."""
        if self.estoque is None:
            return []
        produtos = []
        for item in itens:
            produtos.append(item.produto)
            produtos.extend(item.sabores)
        return produtos_indisponiveis(produtos, self.estoque.bloqueados())

    def _exigir_disponiveis(self, produtos: List[Produto]) -> None:
        if self.estoque is None:
            return
        erros = produtos_indisponiveis(produtos, self.estoque.bloqueados())
        if erros:
            raise ValidacaoPedidoError(erros)

    def obter(self) -> Carrinho:
        rascunho = self.config.carrinho()
        return Carrinho.model_validate(rascunho) if rascunho else Carrinho()

    def _salvar(self, carrinho: Carrinho) -> CarrinhoResponse:
        self.config.salvar_carrinho(carrinho.model_dump(mode="json"))
        return self.resposta(carrinho)

    def resposta(self, carrinho: Carrinho) -> CarrinhoResponse:
        totais = calcular_totais(carrinho.itens, carrinho.desconto, carrinho.taxa_entrega, carrinho.tipo)
        return CarrinhoResponse(carrinho=carrinho, totais=totais)

    def adicionar(self, req: AdicionarItemRequest) -> CarrinhoResponse:
        carrinho = self.obter()
        produto = self.catalogo.buscar_produto(req.sabor)
        if produto.is_pizza:
            if req.tamanho is None:
                raise ValidacaoPedidoError(["Selecione o tamanho da pizza"])
            nomes = req.sabores or [produto.sabor]
            if produto.sabor not in nomes:
                nomes = [produto.sabor] + nomes
            sabores = [self.catalogo.buscar_produto(n) for n in nomes]
            self._exigir_disponiveis(sabores)
            preco = self.catalogo.preco_pizza(nomes, req.tamanho)
            adicionar_item(carrinho.itens, produto, preco, req.tamanho, sabores, req.observacao)
        else:
            self._exigir_disponiveis([produto])
            adicionar_item(carrinho.itens, produto, produto.preco or 0, observacao=req.observacao)
        return self._salvar(carrinho)

    def alterar_quantidade(self, item_id: str, quantidade: int) -> CarrinhoResponse:
        carrinho = self.obter()
        alterar_quantidade(carrinho.itens, item_id, quantidade)
        return self._salvar(carrinho)

    def incrementar(self, item_id: str) -> CarrinhoResponse:
        carrinho = self.obter()
        item = _localizar(carrinho.itens, item_id)
        alterar_quantidade(carrinho.itens, item_id, item.quantidade + 1)
        return self._salvar(carrinho)

    def decrementar(self, item_id: str) -> CarrinhoResponse:
        carrinho = self.obter()
        item = _localizar(carrinho.itens, item_id)
        alterar_quantidade(carrinho.itens, item_id, item.quantidade - 1)
        return self._salvar(carrinho)

    def remover(self, item_id: str) -> CarrinhoResponse:
        carrinho = self.obter()
        remover_item(carrinho.itens, item_id)
        return self._salvar(carrinho)

    def alterar_observacao(self, item_id: str, observacao: str) -> CarrinhoResponse:
        carrinho = self.obter()
        alterar_observacao(carrinho.itens, item_id, observacao)
        return self._salvar(carrinho)

    def atualizar_dados(self, req: DadosCarrinhoRequest) -> CarrinhoResponse:
        carrinho = self.obter()
        for campo in req.model_fields_set:
            valor = getattr(req, campo)
            if valor is not None or campo in ("troco_para", "meio_pagamento"):
                setattr(carrinho, campo, valor)
        if carrinho.tipo == TipoPedidoEnum.RETIRADA:
            carrinho.taxa_entrega = 0
        if carrinho.meio_pagamento != MeioPagamentoEnum.DINHEIRO:
            carrinho.troco_para = None
        return self._salvar(carrinho)

    def limpar(self) -> CarrinhoResponse:
        self.config.limpar_carrinho()
        return self.resposta(Carrinho())

    def repetir_pedido(self, pedido: PedidoModel) -> CarrinhoResponse:
        """Monta um carrinho novo com os itens e o cliente de um pedido antigo."""
        itens = [
            ItemCarrinho.model_validate({**i, "id": uuid4().hex})
            for i in (pedido.itens or [])
        ]
        cliente = ClientePedido.model_validate(pedido.cliente or {})
        tipo = TipoPedidoEnum(pedido.tipo)
        carrinho = Carrinho(
            itens=itens,
            cliente=cliente,
            tipo=tipo,
            taxa_entrega=float(pedido.taxa_entrega or 0) if tipo == TipoPedidoEnum.DELIVERY else 0,
        )
        return self._salvar(carrinho)
