# -*- coding: utf-8 -*-
"""
Exceções de domínio da API Vida Plena.

As regras de negócio levantam estas exceções; o main.py converte cada uma
na resposta HTTP correspondente.
"""


class ErroDominio(Exception):
    status_code = 400

    def __init__(self, mensagem: str):
        super().__init__(mensagem)
        self.mensagem = mensagem


class ErroValidacao(ErroDominio):
    """Dado inválido informado pelo usuário. Nenhum estado é alterado."""
    status_code = 400


class SaldoCaixaInsuficiente(ErroValidacao):
    def __init__(self, disponivel: float, solicitado: float):
        super().__init__(
            f"Saldo em Caixa insuficiente! Disponível: {formatar_moeda(disponivel)} "
            f"- Solicitado: {formatar_moeda(solicitado)}"
        )
        self.disponivel = disponivel
        self.solicitado = solicitado


class AcessoNegado(ErroDominio):
    status_code = 403


class RegistroNaoEncontrado(ErroDominio):
    status_code = 404


class EstadoInvalido(ErroDominio):
    """A operação não é permitida no status atual do evento."""
    status_code = 409


class TransicaoInvalida(EstadoInvalido):
    pass


class ErroColaborador(ErroDominio):
    """Falha de um serviço externo (banco, armazenamento)."""
    status_code = 502


def formatar_moeda(valor: float) -> str:
    # R$ 1.234,56
    texto = f"{valor:,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")
    return f"R$ {texto}"
