"""
tests/test_api.py

Testa as rotas HTTP com o TestClient (repositório em memória)
"""

import pytest
from fastapi.testclient import TestClient

from main import app


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


class TestHealth:
    def test_ping(self, client):
        response = client.get("/ping")
        assert response.status_code == 200
        assert response.json()["message"] == "pong"

    def test_health(self, client):
        data = client.get("/health").json()
        assert data["status"] == "healthy"
        assert data["storage"] == "memory"

    def test_raiz(self, client):
        data = client.get("/").json()
        assert "neighbors" in data["condicoes_disponiveis"]


class TestAvaliar:
    def test_grafo_em_edicao(self, client, payload_vizinhos):
        response = client.post(
            "/api/estrategias/avaliar",
            json={**payload_vizinhos, "historyInput": "5, 23, 10, 17"},
        )
        assert response.status_code == 200

        data = response.json()
        assert data["success"] is True
        assert data["history"] == [5, 23, 10, 17]
        assert data["shouldActivate"] is True
        assert 17 in data["numbers"]
        assert data["metadata"]["telemetry"]["signalActive"] is True

    def test_override_do_modo(self, client, payload_vizinhos):
        payload_vizinhos["nodes"][2]["config"]["numeros"] = [7]
        response = client.post(
            "/api/estrategias/avaliar",
            json={**payload_vizinhos, "history": [5, 23, 10, 17], "selectionMode": "manual"},
        )
        assert response.json()["numbers"] == [7]

    def test_sem_nos(self, client):
        response = client.post("/api/estrategias/avaliar", json={"nodes": [], "history": [1]})
        assert response.status_code == 400
        assert response.json()["message"] == "nodes required"

    def test_grafo_invalido(self, client):
        response = client.post("/api/estrategias/avaliar", json={
            "nodes": [{"id": "a", "type": "signal"}, {"id": "a", "type": "signal"}],
            "history": [1],
        })
        assert response.status_code == 400
        assert response.json()["problemas"]


class TestEstrategiasCompiladas:
    def test_ciclo(self, client, payload_repeticao_ou_ausencia):
        response = client.post("/api/estrategias/compilar", json=payload_repeticao_ou_ausencia)
        assert response.status_code == 200
        compilada = response.json()
        slug = compilada["slug"]
        assert slug == "repeti-o-ou-aus-ncia"
        assert compilada["fileName"] == f"{slug}.strategy.json"
        assert '"checksum"' in compilada["artifact"]

        lista = client.get("/api/estrategias").json()
        assert slug in [e["slug"] for e in lista["estrategias"]]

        detalhe = client.get(f"/api/estrategias/{slug}").json()
        assert len(detalhe["graph"]["nodes"]) == 4

        sinal = client.post(f"/api/estrategias/{slug}/sinal", json={"history": [1, 3, 18]}).json()
        assert sinal["shouldActivate"] is True
        assert sinal["confidence"] == 0.8

        assert client.delete(f"/api/estrategias/{slug}").status_code == 200
        assert client.get(f"/api/estrategias/{slug}").status_code == 404
        assert client.delete(f"/api/estrategias/{slug}").status_code == 404

    def test_schema_invalido(self, client, payload_vizinhos):
        response = client.post("/api/estrategias/compilar", json={**payload_vizinhos, "schemaVersion": "9"})
        assert response.status_code == 400

    def test_sinal_de_estrategia_inexistente(self, client):
        response = client.post("/api/estrategias/nao-existe/sinal", json={"history": [1]})
        assert response.status_code == 404


class TestTemplates:
    def test_listar(self, client):
        data = client.get("/api/templates").json()
        assert data["total"] == 17

    def test_obter_e_compilar(self, client):
        template = client.get("/api/templates/sofia-atlas-v1").json()["template"]
        response = client.post("/api/estrategias/compilar", json=template)
        assert response.status_code == 200

    def test_inexistente(self, client):
        assert client.get("/api/templates/nao-existe").status_code == 404
