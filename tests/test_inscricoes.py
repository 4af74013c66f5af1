"""Enrollment rules: existence, active event, one enrollment per beneficiary and event."""

import pytest

from vida_plena import inscricoes
from vida_plena.enums import StatusEvento
from vida_plena.erros import EstadoInvalido, ErroValidacao, RegistroNaoEncontrado
from vida_plena.models.audit_log import AuditLog
from vida_plena.models.inscricao import InscricaoEvento


class TestInscricao:

    def test_inscreve_e_audita(self, db, evento_factory, beneficiario_factory, operador):
        evento = evento_factory()
        beneficiario = beneficiario_factory()

        inscricao = inscricoes.inscrever_beneficiario(db, evento.id, beneficiario.id, operador)

        assert inscricao.id is not None
        entradas = db.query(AuditLog).filter(AuditLog.tipo_acao == "InscreverBeneficiario").all()
        assert len(entradas) == 1
        assert evento.nome_evento in entradas[0].justificativa

    def test_segunda_inscricao_e_recusada(self, db, evento_factory, beneficiario_factory, operador):
        evento = evento_factory()
        beneficiario = beneficiario_factory()
        inscricoes.inscrever_beneficiario(db, evento.id, beneficiario.id, operador)

        with pytest.raises(ErroValidacao):
            inscricoes.inscrever_beneficiario(db, evento.id, beneficiario.id, operador)

        assert db.query(InscricaoEvento).count() == 1
        assert db.query(AuditLog).count() == 1

    def test_restricao_unica_do_banco(self, db, evento_factory, beneficiario_factory, operador, monkeypatch):
        evento = evento_factory()
        beneficiario = beneficiario_factory()
        db.add(InscricaoEvento(evento_id=evento.id, beneficiario_id=beneficiario.id))
        db.commit()

        # Simula a corrida: a conferência prévia não enxerga a inscrição existente
        consulta_real = db.query

        def query_sem_duplicada(*entidades):
            consulta = consulta_real(*entidades)
            if entidades == (InscricaoEvento,):
                return consulta.filter(InscricaoEvento.id == -1)
            return consulta

        monkeypatch.setattr(db, "query", query_sem_duplicada)

        with pytest.raises(ErroValidacao):
            inscricoes.inscrever_beneficiario(db, evento.id, beneficiario.id, operador)

        monkeypatch.undo()
        assert db.query(InscricaoEvento).count() == 1
        assert db.query(AuditLog).count() == 0

    @pytest.mark.parametrize("status", [StatusEvento.SUSPENSO, StatusEvento.CANCELADO, StatusEvento.ENCERRADO])
    def test_evento_fora_de_ativo(self, db, evento_factory, beneficiario_factory, operador, status):
        evento = evento_factory(status=status)
        beneficiario = beneficiario_factory()
        with pytest.raises(EstadoInvalido):
            inscricoes.inscrever_beneficiario(db, evento.id, beneficiario.id, operador)

    def test_beneficiario_inexistente(self, db, evento_factory, operador):
        evento = evento_factory()
        with pytest.raises(RegistroNaoEncontrado):
            inscricoes.inscrever_beneficiario(db, evento.id, 999, operador)

    def test_evento_inexistente(self, db, beneficiario_factory, operador):
        beneficiario = beneficiario_factory()
        with pytest.raises(RegistroNaoEncontrado):
            inscricoes.inscrever_beneficiario(db, 999, beneficiario.id, operador)


class TestRemocao:

    def test_remove_inscricao(self, db, evento_factory, beneficiario_factory, admin):
        evento = evento_factory()
        inscricao = inscricoes.inscrever_beneficiario(db, evento.id, beneficiario_factory().id, admin)

        inscricoes.remover_inscricao(db, inscricao.id, admin)
        assert inscricoes.listar_por_evento(db, evento.id) == []

    def test_evento_encerrado_mantem_inscricoes(self, db, evento_factory, beneficiario_factory, admin):
        evento = evento_factory()
        inscricao = inscricoes.inscrever_beneficiario(db, evento.id, beneficiario_factory().id, admin)
        evento.status_evento = StatusEvento.ENCERRADO.value
        db.commit()

        with pytest.raises(EstadoInvalido):
            inscricoes.remover_inscricao(db, inscricao.id, admin)
