"""
core/historico.py

Normalização do histórico de giros

O histórico chega de várias fontes (números crus, cores escritas à mão,
documentos do MongoDB com o campo 'value'). Aqui tudo vira uma sequência
de tokens canônicos, do mais antigo para o mais recente (último = giro atual).
"""

import math
from typing import Any, Iterable, List, Optional, Union

from utils.constants import VERMELHOS, PRETOS, get_cor, get_paridade

Token = Union[int, str]

# Campos aceitos quando o giro chega como registro (dict)
CAMPOS_NUMERO = ('value', 'number', 'numero', 'valor', 'result', 'resultado')

_SINONIMOS = {
    'vermelho': 'vermelho',
    'red': 'vermelho',
    'preto': 'preto',
    'black': 'preto',
    'zero': 'zero',
}


def normalizar_token(raw: Any) -> Optional[Token]:
    """
    Converte um valor bruto em Token

    Returns:
        int 0-36, 'vermelho', 'preto', 'zero', outro literal em minúsculas,
        ou None se o valor não puder ser aproveitado
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, dict):
        for campo in CAMPOS_NUMERO:
            if campo in raw:
                return normalizar_token(raw[campo])
        return None

    if isinstance(raw, int):
        return raw if 0 <= raw <= 36 else None

    if isinstance(raw, float):
        if math.isfinite(raw) and raw.is_integer() and 0 <= raw <= 36:
            return int(raw)
        return None

    if isinstance(raw, str):
        texto = raw.strip().lower()
        if not texto:
            return None
        if texto in _SINONIMOS:
            return _SINONIMOS[texto]
        try:
            numero = float(texto)
        except ValueError:
            # literal customizado, comparado por igualdade de string
            return texto
        if math.isfinite(numero) and numero.is_integer() and 0 <= numero <= 36:
            return int(numero)
        return None

    return None


def normalizar_historico(valores: Iterable[Any]) -> List[Token]:
    """
    Normaliza uma sequência de giros, descartando o que não for reconhecido

    Args:
        valores: Lista em ordem cronológica (mais recente por último)

    Returns:
        Lista de tokens na mesma ordem
    """
    if valores is None:
        return []
    if isinstance(valores, (str, bytes, dict)):
        valores = [valores]

    tokens = []
    for valor in valores:
        token = normalizar_token(valor)
        if token is not None:
            tokens.append(token)
    return tokens


def parse_historico_texto(texto: str) -> List[Token]:
    """
    Lê o histórico digitado no builder, separado por vírgulas

    Exemplo:
        parse_historico_texto('1, 3, vermelho, ,40') -> [1, 3, 'vermelho']
    """
    if not texto:
        return []
    return normalizar_historico(texto.split(','))


def ultimo_numero(history: List[Token]) -> Optional[int]:
    """Último token numérico do histórico (varrendo do fim), ou None"""
    for token in reversed(history):
        if isinstance(token, int):
            return token
    return None


def apenas_numeros(history: List[Token]) -> List[int]:
    """Mantém apenas os tokens numéricos, preservando a ordem"""
    return [t for t in history if isinstance(t, int)]


def token_corresponde(token: Token, evento: str) -> bool:
    """
    Verifica se um token satisfaz um evento do builder

    Eventos: vermelho, preto, zero, par, impar/ímpar, numero:N.
    Qualquer outro evento é comparado como string literal.
    """
    e = str(evento or '').strip().lower()
    e = _SINONIMOS.get(e, e)

    if e == 'vermelho':
        return token == 'vermelho' or (isinstance(token, int) and token in VERMELHOS)
    if e == 'preto':
        return token == 'preto' or (isinstance(token, int) and token in PRETOS)
    if e == 'zero':
        return token == 'zero' or token == 0
    if e == 'par':
        return isinstance(token, int) and token != 0 and token % 2 == 0
    if e in ('impar', 'ímpar'):
        return isinstance(token, int) and token % 2 == 1
    if e.startswith('numero:'):
        try:
            return isinstance(token, int) and token == int(e.split(':', 1)[1])
        except ValueError:
            return False

    return str(token) == e


def evento_do_numero(numero: int) -> str:
    """Evento que casa com o número; o 0 também casa com o literal 'zero'"""
    return 'zero' if numero == 0 else f"numero:{numero}"


def categoria_cor(token: Token) -> Optional[str]:
    """'vermelho', 'preto', 'zero' ou None para literais desconhecidos"""
    if isinstance(token, int):
        return get_cor(token)
    if token in ('vermelho', 'preto', 'zero'):
        return token
    return None


def categoria_paridade(token: Token) -> Optional[str]:
    """'par', 'impar', 'zero' ou None quando o token não tem paridade"""
    if isinstance(token, int):
        return get_paridade(token)
    if token == 'zero':
        return 'zero'
    return None
