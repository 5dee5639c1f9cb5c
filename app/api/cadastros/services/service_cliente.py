from typing import Any, Dict, List, Optional

from app.api.cadastros.models.model_cliente import ClienteModel
from app.api.cadastros.repositories.repo_cliente import ClienteRepository
from app.api.cadastros.schemas.schema_cliente import (
    ClienteCreate,
    ClienteHistoricoResponse,
    ClienteOut,
    ClienteUpdate,
)
from app.api.pedidos.repositories.repo_pedidos import PedidoRepository
from app.core.exceptions import RegistroDuplicadoError, RegistroNaoEncontradoError
from app.utils.logger import logger
from app.utils.telefone import normalizar_telefone

TAMANHO_MINIMO_TELEFONE = 8


class ClienteService:
    def __init__(self, repo: ClienteRepository, pedidos: Optional[PedidoRepository] = None):
        self.repo = repo
        self.pedidos = pedidos

    def list(self, busca: Optional[str] = None) -> List[ClienteModel]:
        if busca and busca.strip():
            return self.repo.buscar(busca)
        return self.repo.listar()

    def get(self, id: str) -> ClienteModel:
        cliente = self.repo.get_by_id(id)
        if not cliente:
            raise RegistroNaoEncontradoError("Cliente não encontrado")
        return cliente

    def _validar_duplicidade(self, telefone: str, nome: str, ignorar_id: Optional[str] = None) -> None:
        erros = []
        for existente in self.repo.conflitos(telefone, nome, ignorar_id):
            if existente.telefone == telefone and "Telefone já cadastrado" not in erros:
                erros.append("Telefone já cadastrado")
            if existente.nome.strip().lower() == nome.strip().lower() and "Nome já cadastrado" not in erros:
                erros.append("Nome já cadastrado")
        if erros:
            raise RegistroDuplicadoError("; ".join(erros), erros)

    def create(self, data: ClienteCreate) -> ClienteModel:
        self._validar_duplicidade(data.telefone, data.nome)
        cliente = self.repo.create(data.model_dump())
        logger.info(f"[Clientes] Cliente criado - id={cliente.id} telefone={cliente.telefone}")
        return cliente

    def update(self, id: str, data: ClienteUpdate) -> ClienteModel:
        atual = self.get(id)
        dados = data.model_dump(exclude_unset=True)
        if "telefone" in dados or "nome" in dados:
            self._validar_duplicidade(
                dados.get("telefone") or atual.telefone,
                dados.get("nome") or atual.nome,
                ignorar_id=id,
            )
        cliente = self.repo.update(id, dados)
        if cliente is None:
            raise RegistroNaoEncontradoError("Cliente não encontrado")
        return cliente

    def delete(self, id: str) -> None:
        if not self.repo.delete(id):
            raise RegistroNaoEncontradoError("Cliente não encontrado")
        logger.info(f"[Clientes] Cliente removido - id={id}")

    def registrar_pedido(self, dados_cliente: Dict[str, Any], total: float) -> None:
        """
        Atualiza o cadastro após um pedido. Roda em segundo plano: qualquer
        falha é só registrada no log, o pedido já foi criado.
        """
        if not dados_cliente.get("telefone"):
            return
        try:
            self.repo.registrar_pedido(dados_cliente, total)
        except Exception as e:
            logger.warning(f"[Clientes] Falha ao sincronizar cliente {dados_cliente.get('telefone')}: {e}")

    def buscar_historico(self, telefone: str) -> ClienteHistoricoResponse:
        """Procura primeiro no cadastro; sem cadastro, usa o último pedido com esse telefone."""
        telefone = normalizar_telefone(telefone) or ""
        if len(telefone) < TAMANHO_MINIMO_TELEFONE:
            return ClienteHistoricoResponse()

        cliente = self.repo.get_by_telefone(telefone)
        if cliente:
            return ClienteHistoricoResponse(
                cliente=ClienteOut.model_validate(cliente),
                nome=cliente.nome,
                endereco=cliente.endereco,
                bairro=cliente.bairro,
                complemento=cliente.complemento,
                total_pedidos=cliente.total_pedidos or 0,
                origem="cadastro",
            )

        if self.pedidos is None:
            return ClienteHistoricoResponse()
        pedidos = self.pedidos.listar_por_telefone(telefone)
        if not pedidos:
            return ClienteHistoricoResponse()
        ultimo = pedidos[0].cliente or {}
        return ClienteHistoricoResponse(
            nome=ultimo.get("nome"),
            endereco=ultimo.get("endereco"),
            bairro=ultimo.get("bairro"),
            complemento=ultimo.get("complemento"),
            total_pedidos=len(pedidos),
            origem="pedidos",
        )
