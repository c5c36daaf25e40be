"""
utils/helpers.py

Geometria da roda e funções auxiliares utilizadas pelas condições
"""

import math
from typing import Any, Iterable, List, Optional

from utils.constants import RODA, POSICAO_RODA, PASSO_ESPELHO, TOTAL_NUMEROS, is_valid_number


def distancia_circular(num1: int, num2: int) -> float:
    """
    Retorna a menor distância entre dois números na roda física

    Args:
        num1: Primeiro número
        num2: Segundo número

    Returns:
        Distância mínima (0-18) ou math.inf se algum número não estiver na roda

    Exemplo:
        distancia_circular(0, 32) -> 1 (vizinhos)
        distancia_circular(0, 15) -> 2
    """
    if num1 not in POSICAO_RODA or num2 not in POSICAO_RODA:
        return math.inf

    diff = abs(POSICAO_RODA[num1] - POSICAO_RODA[num2])
    return min(diff, TOTAL_NUMEROS - diff)


def espelho_roda(numero: int) -> Optional[int]:
    """
    Retorna o "espelho" de um número na roda: 18 casas à frente

    Como a roda tem 37 casas não existe oposto exato; a fórmula
    (idx + 18) % 37 é mantida como está.

    Exemplo:
        espelho_roda(0) -> 10
        espelho_roda(5) -> 0
    """
    if numero not in POSICAO_RODA:
        return None
    return RODA[(POSICAO_RODA[numero] + PASSO_ESPELHO) % TOTAL_NUMEROS]


def get_vizinhos_raio(numero: int, raio: int) -> List[int]:
    """
    Retorna o número e todos os vizinhos até `raio` casas na roda

    Exemplo:
        get_vizinhos_raio(0, 1) -> [0, 26, 32]
    """
    if numero not in POSICAO_RODA:
        return []
    return sorted(n for n in RODA if distancia_circular(n, numero) <= raio)


def get_terminal(numero: int) -> int:
    """
    Retorna o dígito terminal de um número

    Exemplo:
        get_terminal(29) -> 9
        get_terminal(5) -> 5
    """
    return numero % 10


def get_familia_terminal(terminal: int) -> List[int]:
    """
    Retorna todos os números com o mesmo terminal

    Exemplo:
        get_familia_terminal(3) -> [3, 13, 23, 33]
        get_familia_terminal(9) -> [9, 19, 29]
    """
    return [n for n in range(terminal, 37, 10)]


def numeros_validos(valores: Iterable[Any]) -> List[int]:
    """
    Filtra uma lista qualquer mantendo apenas números da roleta, sem repetição,
    em ordem crescente
    """
    saida = set()
    for valor in valores or []:
        if isinstance(valor, float) and valor.is_integer():
            valor = int(valor)
        if is_valid_number(valor):
            saida.add(valor)
    return sorted(saida)


def clamp_int(valor: Any, minimo: int, maximo: int, padrao: int) -> int:
    """
    Converte para inteiro e limita ao intervalo [minimo, maximo]

    Valores não numéricos voltam para o padrão (não levanta exceção).
    """
    try:
        numero = float(valor)
    except (TypeError, ValueError):
        return padrao
    if isinstance(valor, bool) or not math.isfinite(numero):
        return padrao
    return max(minimo, min(maximo, int(round(numero))))


def clamp_float(valor: Any, minimo: float, maximo: float, padrao: float) -> float:
    """Mesmo que clamp_int, para frações (ex: frequência mínima 0-1)"""
    try:
        numero = float(valor)
    except (TypeError, ValueError):
        return padrao
    if isinstance(valor, bool) or not math.isfinite(numero):
        return padrao
    return max(minimo, min(maximo, numero))


def slugify(nome: str) -> str:
    """
    Gera um identificador legível a partir do nome da estratégia

    Exemplo:
        slugify('Espelhos SOFIA v2') -> 'espelhos-sofia-v2'
    """
    saida = []
    for char in str(nome).lower():
        saida.append(char if ('a' <= char <= 'z' or '0' <= char <= '9') else '-')
    slug = '-'.join(parte for parte in ''.join(saida).split('-') if parte)
    return slug
