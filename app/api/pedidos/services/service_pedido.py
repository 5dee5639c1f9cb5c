from __future__ import annotations

from datetime import timedelta
from decimal import Decimal
from typing import List, Optional

from fastapi import BackgroundTasks

from app.api.cadastros.services.service_cliente import ClienteService
from app.api.cadastros.services.service_funcionario import FuncionarioService
from app.api.configuracoes.services.service_configuracao import ConfiguracaoService
from app.api.pedidos.models.model_pedido import PedidoModel
from app.api.pedidos.repositories.repo_pedidos import PedidoRepository
from app.api.pedidos.schemas.schema_carrinho import Carrinho, CarrinhoResponse
from app.api.pedidos.services.service_carrinho import CarrinhoService, calcular_totais, validar
from app.api.shared.schemas.schema_shared_enums import StatusPedidoEnum, TipoPedidoEnum
from app.core.exceptions import RegistroNaoEncontradoError, ValidacaoPedidoError
from app.utils.database_utils import now_trimmed
from app.utils.logger import logger
from app.utils.telefone import normalizar_telefone


class PedidoService:
    def __init__(
        self,
        repo: PedidoRepository,
        clientes: ClienteService,
        config: ConfiguracaoService,
        funcionarios: FuncionarioService,
        carrinho: CarrinhoService,
    ):
        self.repo = repo
        self.clientes = clientes
        self.config = config
        self.funcionarios = funcionarios
        self.carrinho = carrinho

    def prazo_minutos(self, tipo: TipoPedidoEnum) -> int:
        if tipo == TipoPedidoEnum.DELIVERY:
            return self.config.sla_entrega_min
        return self.config.sla_retirada_min

    def finalizar(
        self,
        carrinho: Optional[Carrinho],
        operador: Optional[str],
        background_tasks: Optional[BackgroundTasks] = None,
    ) -> PedidoModel:
        """
        Valida o carrinho, grava o pedido e limpa o rascunho.

        O cadastro do cliente é atualizado depois da resposta (background task);
        falha nessa etapa não desfaz o pedido.
        """
        carrinho = carrinho or self.carrinho.obter()
        totais = calcular_totais(carrinho.itens, carrinho.desconto, carrinho.taxa_entrega, carrinho.tipo)

        escalados = len(self.funcionarios.escala_ativa().itens) if self.config.exigir_escala else 0
        erros = validar(carrinho, totais, self.config.loja_aberta, self.config.exigir_escala, escalados)
        # itens podem ter sido bloqueados depois de entrar no carrinho
        erros += self.carrinho.indisponiveis(carrinho.itens)
        if erros:
            raise ValidacaoPedidoError(erros)

        cliente = carrinho.cliente.model_dump()
        cliente["telefone"] = normalizar_telefone(cliente["telefone"])
        agora = now_trimmed()
        dados = {
            "criado_em": agora,
            "prazo": agora + timedelta(minutes=self.prazo_minutos(carrinho.tipo)),
            "tipo": carrinho.tipo,
            "status": StatusPedidoEnum.CONFIRMED,
            "cliente": cliente,
            "cliente_telefone": cliente["telefone"],
            "itens": [i.model_dump(mode="json") for i in carrinho.itens],
            "subtotal": Decimal(str(totais.subtotal)),
            "desconto": Decimal(str(totais.desconto)),
            "taxa_entrega": Decimal(str(totais.taxa_entrega)),
            "total": Decimal(str(totais.total)),
            "meio_pagamento": carrinho.meio_pagamento,
            "troco_para": Decimal(str(carrinho.troco_para)) if carrinho.troco_para is not None else None,
            "operador": operador,
        }
        pedido = self.repo.criar(dados)
        logger.info(
            f"[Pedidos] Pedido #{pedido.numero} criado ({pedido.origem}) - "
            f"tipo={carrinho.tipo.value} total={totais.total} operador={operador}"
        )

        if background_tasks is not None:
            background_tasks.add_task(self.clientes.registrar_pedido, cliente, totais.total)
        else:
            self.clientes.registrar_pedido(cliente, totais.total)

        self.carrinho.limpar()
        return pedido

    def listar(self) -> List[PedidoModel]:
        return self.repo.listar()

    def obter(self, numero: int) -> PedidoModel:
        pedido = self.repo.buscar(numero)
        if pedido is None:
            raise RegistroNaoEncontradoError(f"Pedido #{numero} não encontrado")
        return pedido

    def repetir(self, numero: int) -> CarrinhoResponse:
        pedido = self.obter(numero)
        logger.info(f"[Pedidos] Repetindo pedido #{numero}")
        return self.carrinho.repetir_pedido(pedido)
