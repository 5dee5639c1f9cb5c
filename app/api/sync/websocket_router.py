"""
Snapshots em tempo real para o navegador.

Cada conexão abre uma assinatura na coleção pedida; o callback roda na
thread de quem escreveu e repassa o snapshot para o loop do WebSocket
pela fila.
"""
import asyncio
import logging
from typing import Any, Callable, Dict, Tuple

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect, status
from starlette.concurrency import run_in_threadpool

from app.api.cadastros.schemas.schema_cliente import ClienteOut
from app.api.cadastros.schemas.schema_funcionario import FuncionarioOut
from app.api.cadastros.services.dependencies import (
    get_cliente_repository,
    get_funcionario_repository,
    get_pedido_repository,
)
from app.api.estoque.services.dependencies import get_estoque_repository
from app.api.pedidos.schemas.schema_pedido import PedidoResponse
from app.core.admin_dependencies import usuario_do_token
from app.database.db_connection import LocalSessionLocal

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ws", tags=["websocket"])

Serializador = Callable[[Any], Any]

COLECOES: Dict[str, Tuple[Callable[[], Any], Serializador]] = {
    "pedidos": (get_pedido_repository, lambda p: PedidoResponse.model_validate(p).model_dump(mode="json")),
    "clientes": (get_cliente_repository, lambda c: ClienteOut.model_validate(c).model_dump(mode="json")),
    "funcionarios": (get_funcionario_repository, lambda f: FuncionarioOut.model_validate(f).model_dump(mode="json")),
    "estoque": (get_estoque_repository, lambda nome: nome),
}


def _autenticar(token: str):
    db = LocalSessionLocal()
    try:
        return usuario_do_token(token, db)
    finally:
        db.close()


@router.websocket("/sync/{colecao}")
async def websocket_colecao(
    websocket: WebSocket,
    colecao: str,
    token: str = Query(..., description="JWT do login"),
):
    fonte = COLECOES.get(colecao)
    user = await run_in_threadpool(_autenticar, token)
    if fonte is None or user is None:
        logger.warning(f"[WS] Conexão recusada - colecao={colecao}")
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    obter_repo, serializar = fonte
    repo = obter_repo()
    loop = asyncio.get_running_loop()
    fila: asyncio.Queue = asyncio.Queue()

    def ao_receber(snapshot):
        itens = [serializar(r) for r in snapshot]
        loop.call_soon_threadsafe(fila.put_nowait, itens)

    assinatura = await run_in_threadpool(repo.assinar, ao_receber)
    logger.info(f"[WS] {user.username} assinou {colecao}")

    async def enviar():
        while True:
            itens = await fila.get()
            await websocket.send_json({"type": "snapshot", "colecao": colecao, "itens": itens})

    async def receber():
        while True:
            mensagem = await websocket.receive_json()
            if isinstance(mensagem, dict) and mensagem.get("type") == "ping":
                await websocket.send_json({"type": "pong"})

    tarefas = [asyncio.create_task(enviar()), asyncio.create_task(receber())]
    try:
        feitas, pendentes = await asyncio.wait(tarefas, return_when=asyncio.FIRST_COMPLETED)
        for tarefa in pendentes:
            tarefa.cancel()
        for tarefa in feitas:
            erro = tarefa.exception()
            if erro is not None and not isinstance(erro, WebSocketDisconnect):
                logger.error(f"[WS] Erro na conexão de {colecao}: {erro}")
    finally:
        assinatura.cancelar()
        logger.info(f"[WS] {user.username} saiu de {colecao}")
