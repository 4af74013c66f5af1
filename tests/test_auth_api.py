"""Login, user administration and the audit trail routes."""

from datetime import datetime, timezone

from jose import jwt

from vida_plena.auditoria import registrar_auditoria
from vida_plena.auth import create_access_token
from vida_plena.config import Config
from vida_plena.enums import TipoAcao


class TestLogin:

    def test_token_valido(self, client, admin_headers):
        resp = client.post("/api/v1/auth/token", data={"username": "admin@vidaplena.org", "password": "senha123"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["token_type"] == "bearer"
        assert body["user_info"]["perfil"] == "Administrador"

        me = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
        assert me.json()["email"] == "admin@vidaplena.org"

    def test_senha_incorreta(self, client, admin_headers):
        resp = client.post("/api/v1/auth/token", data={"username": "admin@vidaplena.org", "password": "errada"})
        assert resp.status_code == 401

    def test_expiracao_em_utc(self):
        payload = jwt.decode(create_access_token({"sub": "admin@vidaplena.org"}), Config.SECRET_KEY,
                             algorithms=[Config.ALGORITHM])
        restante = payload["exp"] - datetime.now(timezone.utc).timestamp()
        assert abs(restante - Config.ACCESS_TOKEN_EXPIRE_MINUTES * 60) < 60

    def test_token_invalido(self, client):
        resp = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer nao-e-um-jwt"})
        assert resp.status_code == 401


class TestUsuarios:

    def test_gerenciador_cria_usuario(self, client, gerente_headers):
        resp = client.post("/api/v1/usuarios", json={
            "email": "novo@vidaplena.org", "nome": "Novo Operador", "password": "segredo1", "perfil": "Operador",
        }, headers=gerente_headers)
        assert resp.status_code == 201
        assert resp.json()["perfil"] == "Operador"

    def test_email_duplicado(self, client, gerente_headers):
        resp = client.post("/api/v1/usuarios", json={
            "email": "gerente@vidaplena.org", "password": "segredo1", "perfil": "Operador",
        }, headers=gerente_headers)
        assert resp.status_code == 400

    def test_administrador_nao_gerencia_usuarios(self, client, admin_headers):
        assert client.get("/api/v1/usuarios", headers=admin_headers).status_code == 403

    def test_perfil_desconhecido(self, client, gerente_headers):
        resp = client.post("/api/v1/usuarios", json={
            "email": "x@vidaplena.org", "password": "segredo1", "perfil": "Voluntario",
        }, headers=gerente_headers)
        assert resp.status_code == 422


class TestAuditoria:

    def test_mais_recente_primeiro_e_filtro(self, client, db, admin_headers):
        registrar_auditoria(db, "admin@vidaplena.org", TipoAcao.CRIAR_EVENTO, "Evento: Campanha")
        db.commit()
        registrar_auditoria(db, "admin@vidaplena.org", TipoAcao.SUSPENDER, "Chuva forte")
        db.commit()

        todos = client.get("/api/v1/auditoria", headers=admin_headers).json()
        assert [a["tipo_acao"] for a in todos] == ["Suspender", "CriarEvento"]

        filtrados = client.get("/api/v1/auditoria", params={"tipo_acao": "CriarEvento"}, headers=admin_headers).json()
        assert len(filtrados) == 1

    def test_sem_login(self, client):
        assert client.get("/api/v1/auditoria").status_code == 401
