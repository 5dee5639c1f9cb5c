import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from app.config.settings import DEFAULT_ADMIN_PASSWORD, DEFAULT_ADMIN_USERNAME
from app.main import app


@pytest.fixture(scope="module")
def client():
    # o startup cria as tabelas locais e o administrador padrão
    with TestClient(app) as c:
        yield c


def _login(client, username, password):
    resp = client.post("/api/auth/token", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture(scope="module")
def admin(client):
    return _login(client, DEFAULT_ADMIN_USERNAME, DEFAULT_ADMIN_PASSWORD)


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_login_invalido(client):
    resp = client.post("/api/auth/token", json={"username": DEFAULT_ADMIN_USERNAME, "password": "errada"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Usuário ou senha inválidos"


def test_rotas_exigem_token(client):
    assert client.get("/api/pedidos").status_code == 401
    assert client.get("/api/pedidos", headers={"Authorization": "Bearer lixo"}).status_code == 401


def test_me(client, admin):
    resp = client.get("/api/auth/me", headers=admin)
    assert resp.status_code == 200, resp.text
    assert resp.json()["role"] == "ADMIN"


def test_bloqueio_de_ingrediente_reflete_no_catalogo(client, admin):
    resp = client.post("/api/estoque/bloqueados", json={"nome": "Bacon"}, headers=admin)
    assert resp.status_code == 200, resp.text
    assert "Bacon" in resp.json()["bloqueados"]

    catalogo = client.get("/api/catalogo", params={"busca": "bacon"}, headers=admin).json()
    pizza = next(i for i in catalogo["produtos"] if i["produto"]["sabor"] == "Bacon")
    assert pizza["disponivel"] is False
    assert pizza["motivo"] == "Bacon"

    client.delete("/api/pedidos/carrinho", headers=admin)
    resp = client.post("/api/pedidos/carrinho/itens", json={"sabor": "Bacon", "tamanho": 8}, headers=admin)
    assert resp.status_code == 400
    assert resp.json()["erros"] == ["Bacon está indisponível"]
    assert client.get("/api/pedidos/carrinho", headers=admin).json()["carrinho"]["itens"] == []

    assert client.delete("/api/estoque/bloqueados/Bacon", headers=admin).status_code == 200
    assert client.delete("/api/estoque/bloqueados/Bacon", headers=admin).status_code == 404


def test_preco_pizza(client, admin):
    resp = client.post(
        "/api/catalogo/preco-pizza",
        json={"sabores": ["Mussarela", "Calabresa"], "tamanho": 8},
        headers=admin,
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["preco"] == 46.5


def test_fluxo_do_caixa_ate_o_quadro(client, admin):
    client.delete("/api/pedidos/carrinho", headers=admin)

    # carrinho incompleto: todas as pendências voltam juntas
    resp = client.post("/api/pedidos", headers=admin)
    assert resp.status_code == 400
    assert "O carrinho está vazio" in resp.json()["erros"]

    resp = client.post(
        "/api/pedidos/carrinho/itens",
        json={"sabor": "Mussarela", "sabores": ["Mussarela", "Calabresa"], "tamanho": 8},
        headers=admin,
    )
    assert resp.status_code == 200, resp.text
    resp = client.put(
        "/api/pedidos/carrinho/dados",
        json={
            "cliente": {"nome": "Maria", "telefone": "11999990000", "endereco": "Rua A, 10", "bairro": "Centro"},
            "tipo": "DELIVERY",
            "taxa_entrega": 5,
            "meio_pagamento": "PIX",
        },
        headers=admin,
    )
    assert resp.json()["totais"]["total"] == 51.5

    resp = client.post("/api/pedidos", headers=admin)
    assert resp.status_code == 201, resp.text
    numero = resp.json()["numero"]
    assert resp.json()["operador"]

    quadro = client.get("/api/pedidos/kanban", headers=admin).json()
    assert numero in [c["pedido"]["numero"] for c in quadro["colunas"]["CONFIRMED"]]

    resp = client.post(f"/api/pedidos/kanban/{numero}/avancar", headers=admin)
    assert resp.json()["status"] == "KITCHEN"

    resp = client.post(f"/api/pedidos/kanban/{numero}/cancelar", json={"motivo": "Porque sim"}, headers=admin)
    assert resp.status_code == 400

    resp = client.post(f"/api/pedidos/kanban/{numero}/cancelar", json={"motivo": "Golpe / Trote"}, headers=admin)
    assert resp.status_code == 200, resp.text
    assert resp.json()["status"] == "CANCELED"

    resp = client.post(f"/api/pedidos/kanban/{numero}/mover", json={"destino": "KITCHEN"}, headers=admin)
    assert resp.json()["movido"] is False

    encontrados = client.get("/api/pedidos", params={"busca": "maria"}, headers=admin).json()
    assert numero in [p["numero"] for p in encontrados]


def test_pedido_inexistente(client, admin):
    resp = client.get("/api/pedidos/999999", headers=admin)
    assert resp.status_code == 404


def test_relatorios_e_exportacao(client, admin):
    assert client.get("/api/relatorios/fechamento", headers=admin).status_code == 200
    assert client.get("/api/relatorios/comparativos", headers=admin).status_code == 200

    resp = client.get("/api/relatorios/exportar/pedidos.csv", headers=admin)
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert resp.content.startswith("\ufeff".encode("utf-8"))


def test_configuracoes(client, admin):
    resp = client.patch("/api/configuracoes", json={"sla_entrega_min": 45}, headers=admin)
    assert resp.status_code == 200, resp.text
    assert resp.json()["sla_entrega_min"] == 45

    resp = client.patch("/api/configuracoes", json={"sla_entrega_min": 0}, headers=admin)
    assert resp.status_code == 422


def test_gestao_de_usuarios_so_para_admin(client, admin):
    resp = client.post(
        "/api/cadastros/usuarios",
        json={"username": "caixa_api", "nome": "Caixa API", "password": "1234"},
        headers=admin,
    )
    assert resp.status_code == 201, resp.text
    usuario_id = resp.json()["id"]

    resp = client.post(
        "/api/cadastros/usuarios",
        json={"username": "caixa_api", "nome": "Outro", "password": "1234"},
        headers=admin,
    )
    assert resp.status_code == 409
    assert resp.json()["detail"] == "Nome de usuário já existe"

    operador = _login(client, "caixa_api", "1234")
    assert client.get("/api/cadastros/usuarios", headers=operador).status_code == 403
    assert client.get("/api/pedidos/kanban", headers=operador).status_code == 200

    assert client.delete(f"/api/cadastros/usuarios/{usuario_id}", headers=admin).status_code == 204


def test_websocket_entrega_snapshot_e_responde_ping(client, admin):
    token = admin["Authorization"].split(" ", 1)[1]
    with client.websocket_connect(f"/ws/sync/estoque?token={token}") as ws:
        mensagem = ws.receive_json()
        assert mensagem["type"] == "snapshot"
        assert mensagem["colecao"] == "estoque"
        assert isinstance(mensagem["itens"], list)

        ws.send_json({"type": "ping"})
        assert ws.receive_json() == {"type": "pong"}


def test_websocket_recusa_token_invalido(client):
    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect("/ws/sync/pedidos?token=lixo") as ws:
            ws.receive_json()


def test_monitoramento(client, admin):
    assert client.get("/api/monitoring/metrics").status_code == 200

    resp = client.get("/api/monitoring/sync", headers=admin)
    assert resp.status_code == 200, resp.text
    assert resp.json()["remoto_configurado"] is False
    assert resp.json()["modo_offline"] is False
