"""HTTP routes for events: creation, lifecycle, funding, expenses, receipts, photos and progress notes."""

import io
from datetime import date, timedelta

from PIL import Image

from vida_plena.models.audit_log import AuditLog

from tests.conftest import CNPJ_VALIDO, CPF_VALIDO, RESUMO_VALIDO

JUSTIFICATIVA_CAIXA = "Uso do Caixa para completar a compra de cestas básicas da campanha, aprovado em reunião da diretoria da ONG."


def _payload_evento(**overrides):
    payload = {
        "nome_evento": "Campanha de Vacinação de Inverno",
        "tipo_evento": "Campanha de Saude",
        "data_inicio": (date.today() + timedelta(days=7)).isoformat(),
        "horario_inicio": "09:00",
        "horario_fim": "17:00",
        "fontes": [{
            "origem": "Doacao",
            "valor": 150.0,
            "doador_nome": "João Pereira",
            "doador_documento": CPF_VALIDO,
            "forma_pagamento": "PIX",
        }],
    }
    payload.update(overrides)
    return payload


def _imagem_png():
    buf = io.BytesIO()
    Image.new("RGBA", (40, 30), (255, 0, 0, 128)).save(buf, format="PNG")
    buf.seek(0)
    return buf


class TestCriacao:

    def test_cria_evento_com_fontes(self, client, db, admin_headers):
        resp = client.post("/api/v1/eventos", json=_payload_evento(), headers=admin_headers)
        assert resp.status_code == 201
        body = resp.json()
        assert body["status_evento"] == "Ativo"
        assert body["verba_disponivel"] == 150.0
        assert body["saldo_atual"] == 150.0
        assert body["data_fim"] == body["data_inicio"]
        assert db.query(AuditLog).filter(AuditLog.tipo_acao == "CriarEvento").count() == 1

    def test_sem_autenticacao(self, client):
        resp = client.post("/api/v1/eventos", json=_payload_evento())
        assert resp.status_code == 401

    def test_operador_nao_cria(self, client, operador_headers):
        resp = client.post("/api/v1/eventos", json=_payload_evento(), headers=operador_headers)
        assert resp.status_code == 403

    def test_verba_minima(self, client, db, admin_headers):
        payload = _payload_evento()
        payload["fontes"][0]["valor"] = 99.99
        resp = client.post("/api/v1/eventos", json=payload, headers=admin_headers)
        assert resp.status_code == 400
        assert "R$ 100,00" in resp.json()["detail"]
        assert db.query(AuditLog).count() == 0

    def test_nome_curto(self, client, admin_headers):
        resp = client.post("/api/v1/eventos", json=_payload_evento(nome_evento="Festa"), headers=admin_headers)
        assert resp.status_code == 400

    def test_inicio_hoje_e_recusado(self, client, admin_headers):
        resp = client.post("/api/v1/eventos", json=_payload_evento(data_inicio=date.today().isoformat()), headers=admin_headers)
        assert resp.status_code == 400

    def test_horario_fora_da_grade(self, client, admin_headers):
        resp = client.post("/api/v1/eventos", json=_payload_evento(horario_inicio="09:10"), headers=admin_headers)
        assert resp.status_code == 400

    def test_termino_antes_do_inicio(self, client, admin_headers):
        resp = client.post("/api/v1/eventos", json=_payload_evento(horario_inicio="17:00", horario_fim="09:00"), headers=admin_headers)
        assert resp.status_code == 400

    def test_tipo_fora_do_conjunto(self, client, admin_headers):
        resp = client.post("/api/v1/eventos", json=_payload_evento(tipo_evento="Show"), headers=admin_headers)
        assert resp.status_code == 422

    def test_caixa_acima_do_saldo_global(self, client, admin_headers, evento_factory):
        evento_factory(verba=100.0)
        payload = _payload_evento()
        payload["fontes"].append({"origem": "Caixa", "valor": 80.0, "justificativa_uso": JUSTIFICATIVA_CAIXA})
        payload["fontes"].append({"origem": "Caixa", "valor": 80.0, "justificativa_uso": JUSTIFICATIVA_CAIXA})

        resp = client.post("/api/v1/eventos", json=payload, headers=admin_headers)
        assert resp.status_code == 400
        assert "Saldo em Caixa insuficiente" in resp.json()["detail"]

    def test_nome_nao_pode_ser_alterado(self, client, admin_headers, evento_factory):
        evento = evento_factory()
        resp = client.put(f"/api/v1/eventos/{evento.id}", json={"nome_evento": "Outro nome qualquer"}, headers=admin_headers)
        assert resp.status_code == 422

    def test_atualiza_tipo(self, client, admin_headers, evento_factory):
        evento = evento_factory()
        resp = client.put(f"/api/v1/eventos/{evento.id}", json={"tipo_evento": "Natal"}, headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json()["tipo_evento"] == "Natal"


class TestConsulta:

    def test_lista_e_filtra_por_status(self, client, operador_headers, evento_factory):
        from vida_plena.enums import StatusEvento
        evento_factory()
        evento_factory(status=StatusEvento.SUSPENSO)

        assert len(client.get("/api/v1/eventos", headers=operador_headers).json()) == 2
        resp = client.get("/api/v1/eventos", params={"status_evento": "Suspenso"}, headers=operador_headers)
        assert [e["status_evento"] for e in resp.json()] == ["Suspenso"]

    def test_gerenciador_nao_ve_eventos(self, client, gerente_headers):
        assert client.get("/api/v1/eventos", headers=gerente_headers).status_code == 403

    def test_detalhe_recalcula_saldo(self, client, db, admin_headers, evento_factory):
        evento = evento_factory(verba=500.0)
        evento.saldo_atual = 1.0
        db.commit()

        resp = client.get(f"/api/v1/eventos/{evento.id}", headers=admin_headers)
        assert resp.status_code == 200
        body = resp.json()
        assert body["saldo_atual"] == 500.0
        assert body["total_gastos"] == 0.0
        assert body["participantes"] == 0

    def test_evento_inexistente(self, client, admin_headers):
        resp = client.get("/api/v1/eventos/999", headers=admin_headers)
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Evento não encontrado"


class TestCicloDeVida:

    def test_suspender_e_reativar(self, client, operador_headers, evento_factory):
        evento = evento_factory()
        url = f"/api/v1/eventos/{evento.id}"

        resp = client.post(f"{url}/suspender", json={"justificativa": "x" * 59}, headers=operador_headers)
        assert resp.status_code == 400

        resp = client.post(f"{url}/suspender", json={"justificativa": "x" * 60}, headers=operador_headers)
        assert resp.status_code == 200
        assert resp.json()["status_evento"] == "Suspenso"

        resp = client.post(f"{url}/reativar", headers=operador_headers)
        assert resp.json()["status_evento"] == "Ativo"

    def test_cancelado_retorna_conflito(self, client, admin_headers, evento_factory):
        evento = evento_factory()
        url = f"/api/v1/eventos/{evento.id}"
        assert client.post(f"{url}/cancelar", json={"justificativa": "x" * 100}, headers=admin_headers).status_code == 200

        resp = client.post(f"{url}/reativar", headers=admin_headers)
        assert resp.status_code == 409

    def test_checklist_e_encerramento(self, client, admin_headers, evento_pronto_para_encerrar):
        url = f"/api/v1/eventos/{evento_pronto_para_encerrar.id}"

        checklist = client.get(f"{url}/encerramento", headers=admin_headers).json()
        assert checklist["participantes"] == 5
        assert checklist["fotos"] == 2
        assert not checklist["apto"]

        checklist = client.get(f"{url}/encerramento", params={"resumo_fechamento": RESUMO_VALIDO}, headers=admin_headers).json()
        assert checklist["apto"]

        resp = client.post(f"{url}/encerrar", json={"resumo_fechamento": RESUMO_VALIDO}, headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json()["publico_alcancado"] == 5

    def test_encerramento_sem_requisitos(self, client, admin_headers, evento_factory):
        evento = evento_factory()
        resp = client.post(f"/api/v1/eventos/{evento.id}/encerrar", json={"resumo_fechamento": RESUMO_VALIDO}, headers=admin_headers)
        assert resp.status_code == 400
        assert "participantes" in resp.json()["detail"]


class TestFinanceiro:

    def test_fontes_e_gastos(self, client, operador_headers, evento_factory):
        evento = evento_factory(verba=200.0)
        url = f"/api/v1/eventos/{evento.id}"

        resp = client.post(f"{url}/fontes", json={
            "origem": "Doacao", "valor": 50.0, "doador_nome": "Padaria Central",
            "doador_documento": CNPJ_VALIDO, "forma_pagamento": "Dinheiro",
        }, headers=operador_headers)
        assert resp.status_code == 201

        resp = client.post(f"{url}/gastos", json={
            "descricao_gasto": "Compra de cestas básicas", "valor_gasto": 120.0,
            "fornecedor_nome": "Mercado Bom Preço", "fornecedor_documento": CNPJ_VALIDO,
            "s3_link_comprovante": f"eventos/{evento.id}/comprovantes/nota.pdf",
        }, headers=operador_headers)
        assert resp.status_code == 201
        gasto_id = resp.json()["id"]

        detalhe = client.get(url, headers=operador_headers).json()
        assert detalhe["verba_disponivel"] == 250.0
        assert detalhe["total_gastos"] == 120.0
        assert detalhe["saldo_atual"] == 130.0

        assert client.delete(f"/api/v1/eventos/gastos/{gasto_id}", headers=operador_headers).status_code == 204
        assert client.get(url, headers=operador_headers).json()["saldo_atual"] == 250.0
        assert len(client.get(f"{url}/fontes", headers=operador_headers).json()) == 2

    def test_valores_nao_finitos_sao_recusados(self, client, operador_headers, evento_factory):
        evento = evento_factory(verba=200.0)
        url = f"/api/v1/eventos/{evento.id}"
        headers = {**operador_headers, "Content-Type": "application/json"}

        resp = client.post(f"{url}/fontes", content=(
            '{"origem": "Doacao", "valor": Infinity, "doador_nome": "Padaria Central", '
            f'"doador_documento": "{CNPJ_VALIDO}", "forma_pagamento": "PIX"}}'
        ), headers=headers)
        assert resp.status_code == 422

        resp = client.post(f"{url}/gastos", content=(
            '{"descricao_gasto": "Compra de cestas básicas", "valor_gasto": NaN, '
            f'"fornecedor_nome": "Mercado Bom Preço", "fornecedor_documento": "{CNPJ_VALIDO}", '
            '"s3_link_comprovante": "eventos/1/comprovantes/nota.pdf"}'
        ).encode(), headers=headers)
        assert resp.status_code == 422

        detalhe = client.get(url, headers=operador_headers).json()
        assert detalhe["verba_disponivel"] == 200.0
        assert detalhe["saldo_atual"] == 200.0
        assert client.get("/api/v1/dashboard/caixa", headers=operador_headers).json() == {"saldo_disponivel": 200.0}

    def test_upload_comprovante(self, client, operador_headers, evento_factory, s3_fake):
        evento = evento_factory()
        resp = client.post(
            f"/api/v1/eventos/{evento.id}/comprovantes",
            files={"arquivo": ("nota.PDF", io.BytesIO(b"%PDF-1.4"), "application/pdf")},
            headers=operador_headers,
        )
        assert resp.status_code == 201
        chave = resp.json()["chave"]
        assert chave.startswith(f"eventos/{evento.id}/comprovantes/")
        assert chave.endswith(".pdf")
        assert s3_fake.objetos[chave] == (b"%PDF-1.4", "application/pdf")


class TestFotos:

    def test_upload_converte_para_jpeg(self, client, operador_headers, evento_factory, s3_fake):
        evento = evento_factory()
        resp = client.post(
            f"/api/v1/eventos/{evento.id}/fotos",
            files={"foto": ("foto.png", _imagem_png(), "image/png")},
            headers=operador_headers,
        )
        assert resp.status_code == 201
        body = resp.json()
        assert body["s3_link_foto"].startswith(f"eventos/{evento.id}/fotos/")
        assert body["url"].startswith("https://storage.test/test-bucket/")

        conteudo, content_type = s3_fake.objetos[body["s3_link_foto"]]
        assert content_type == "image/jpeg"
        assert conteudo[:2] == b"\xff\xd8"

        fotos = client.get(f"/api/v1/eventos/{evento.id}/fotos", headers=operador_headers).json()
        assert len(fotos) == 1

        assert client.delete(f"/api/v1/eventos/fotos/{body['id']}", headers=operador_headers).status_code == 204
        assert s3_fake.objetos == {}

    def test_arquivo_que_nao_e_imagem(self, client, operador_headers, evento_factory):
        evento = evento_factory()
        resp = client.post(
            f"/api/v1/eventos/{evento.id}/fotos",
            files={"foto": ("foto.jpg", io.BytesIO(b"nao sou imagem"), "image/jpeg")},
            headers=operador_headers,
        )
        assert resp.status_code == 400

    def test_administrador_nao_envia_fotos(self, client, admin_headers, evento_factory):
        evento = evento_factory()
        resp = client.post(
            f"/api/v1/eventos/{evento.id}/fotos",
            files={"foto": ("foto.png", _imagem_png(), "image/png")},
            headers=admin_headers,
        )
        assert resp.status_code == 403


class TestEvolucoes:

    def test_registra_e_lista(self, client, admin_headers, evento_factory):
        evento = evento_factory()
        url = f"/api/v1/eventos/{evento.id}/evolucoes"
        resp = client.post(url, json={
            "data_evolucao": date.today().isoformat(),
            "descricao_evolucao": "Montagem das tendas concluída",
        }, headers=admin_headers)
        assert resp.status_code == 201
        assert len(client.get(url, headers=admin_headers).json()) == 1
