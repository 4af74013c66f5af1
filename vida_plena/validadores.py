# -*- coding: utf-8 -*-
"""
Validações de formato e de documentos (CPF/CNPJ).

Todas as funções retornam bool e nunca levantam exceção: quem chama decide
se bloqueia a operação ou apenas avisa.
"""
import math
import re
from datetime import date, time, timedelta
from typing import Optional

HORARIO_MINIMO = time(6, 0)
HORARIO_MAXIMO = time(22, 45)


def somente_digitos(texto: Optional[str]) -> str:
    return re.sub(r"[^0-9]", "", texto or "")


def _digitos_repetidos(digitos: str) -> bool:
    return len(set(digitos)) == 1


def _digito_cpf(digitos: str, peso_inicial: int) -> int:
    soma = sum(int(d) * peso for d, peso in zip(digitos, range(peso_inicial, 1, -1)))
    resto = 11 - (soma % 11)
    return 0 if resto >= 10 else resto


def validar_cpf(doc: Optional[str]) -> bool:
    cpf = somente_digitos(doc)
    if len(cpf) != 11 or _digitos_repetidos(cpf):
        return False
    if _digito_cpf(cpf[:9], 10) != int(cpf[9]):
        return False
    return _digito_cpf(cpf[:10], 11) == int(cpf[10])


def _digito_cnpj(digitos: str) -> int:
    # Pesos 5..2 seguidos de 9..2 (ou 6..2, 9..2 para o segundo dígito)
    soma = 0
    pos = len(digitos) - 7
    for d in digitos:
        soma += int(d) * pos
        pos -= 1
        if pos < 2:
            pos = 9
    return 0 if soma % 11 < 2 else 11 - soma % 11


def validar_cnpj(doc: Optional[str]) -> bool:
    cnpj = somente_digitos(doc)
    if len(cnpj) != 14 or _digitos_repetidos(cnpj):
        return False
    if _digito_cnpj(cnpj[:12]) != int(cnpj[12]):
        return False
    return _digito_cnpj(cnpj[:13]) == int(cnpj[13])


def validar_cpf_ou_cnpj(doc: Optional[str]) -> bool:
    return validar_cpf(doc) or validar_cnpj(doc)


def validar_tamanho_minimo(texto: Optional[str], minimo: int) -> bool:
    if texto is None:
        return False
    return len(texto.strip()) >= minimo


def validar_valor_positivo(valor: Optional[float]) -> bool:
    return valor is not None and math.isfinite(valor) and valor > 0


def validar_valor_minimo(valor: Optional[float], minimo: float) -> bool:
    return valor is not None and math.isfinite(valor) and valor >= minimo


def validar_data_futura(data: Optional[date], hoje: Optional[date] = None) -> bool:
    """A data precisa ser a partir de amanhã (pelo menos um dia de antecedência)."""
    if data is None:
        return False
    hoje = hoje or date.today()
    return data >= hoje + timedelta(days=1)


def validar_horario(horario: Optional[time]) -> bool:
    """Horários de 15 em 15 minutos, entre 06:00 e 22:45."""
    if horario is None:
        return False
    if horario.second or horario.microsecond or horario.minute % 15:
        return False
    return HORARIO_MINIMO <= horario <= HORARIO_MAXIMO


def validar_nome_completo(nome: Optional[str]) -> bool:
    return nome is not None and len(nome.split()) >= 2


def validar_documento_identidade(doc: Optional[str]) -> bool:
    """CPF (11 dígitos, com dígito verificador) ou RG genérico com pelo menos 5 dígitos."""
    digitos = somente_digitos(doc)
    if len(digitos) == 11:
        return validar_cpf(digitos)
    return len(digitos) >= 5


def validar_whatsapp(numero: Optional[str]) -> bool:
    """DDD + celular: 11 dígitos e o terceiro dígito é 9. Ex: (11) 91234-5678"""
    digitos = somente_digitos(numero)
    return len(digitos) == 11 and digitos[2] == "9"
