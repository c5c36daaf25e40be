"""
utils/constants.py

Constantes da roleta europeia usadas pelo motor de estratégias
"""

from typing import Dict, List

# ========== RODA EUROPEIA (37 números: 0-36) ==========
# Ordem física do cilindro (não é ordem numérica)
RODA: List[int] = [
    0, 32, 15, 19, 4, 21, 2, 25, 17, 34, 6, 27, 13, 36, 11, 30, 8, 23, 10, 5,
    24, 16, 33, 1, 20, 14, 31, 9, 22, 18, 29, 7, 28, 12, 35, 3, 26
]

# Posição de cada número na roda
POSICAO_RODA: Dict[int, int] = {numero: idx for idx, numero in enumerate(RODA)}

# Deslocamento usado para o "espelho" (oposto aproximado, 37 é ímpar)
PASSO_ESPELHO: int = 18

# ========== CORES ==========
VERMELHOS: List[int] = [
    1, 3, 5, 7, 9, 12, 14, 16, 18, 19, 21, 23, 25, 27, 30, 32, 34, 36
]

PRETOS: List[int] = [
    2, 4, 6, 8, 10, 11, 13, 15, 17, 20, 22, 24, 26, 28, 29, 31, 33, 35
]

# ========== SETORES ==========
# Voisins du Zéro (Vizinhos do Zero)
VOISINS: List[int] = [
    22, 18, 29, 7, 28, 12, 35, 3, 26, 0, 32, 15, 19, 4, 21, 2, 25
]

# Tiers du Cylindre (Terço do Cilindro)
TIERS: List[int] = [
    27, 13, 36, 11, 30, 8, 23, 10, 5, 24, 16, 33
]

# Orphelins (Órfãos)
ORPHELINS: List[int] = [
    1, 20, 14, 31, 9, 17, 34, 6
]

# Ordem de prioridade para desempate entre setores
SETORES: Dict[str, List[int]] = {
    'Voisins de Zero': VOISINS,
    'Tiers du Cylindre': TIERS,
    'Orphelins': ORPHELINS,
}

# ========== DÚZIAS ==========
DUZIA_1: List[int] = list(range(1, 13))   # 1-12
DUZIA_2: List[int] = list(range(13, 25))  # 13-24
DUZIA_3: List[int] = list(range(25, 37))  # 25-36
DUZIAS: List[List[int]] = [DUZIA_1, DUZIA_2, DUZIA_3]

# ========== COLUNAS ==========
COLUNA_1: List[int] = [1, 4, 7, 10, 13, 16, 19, 22, 25, 28, 31, 34]
COLUNA_2: List[int] = [2, 5, 8, 11, 14, 17, 20, 23, 26, 29, 32, 35]
COLUNA_3: List[int] = [3, 6, 9, 12, 15, 18, 21, 24, 27, 30, 33, 36]
COLUNAS: List[List[int]] = [COLUNA_1, COLUNA_2, COLUNA_3]

# ========== PARIDADE ==========
PARES: List[int] = [n for n in range(1, 37) if n % 2 == 0]
IMPARES: List[int] = [n for n in range(1, 37) if n % 2 == 1]

# Todos os números exceto o zero
SEM_ZERO: List[int] = list(range(1, 37))


# ========== MAPEAMENTOS ==========

def get_setor(numero: int) -> str:
    """
    Retorna o nome do setor de um número

    Returns:
        'Voisins de Zero', 'Tiers du Cylindre', 'Orphelins' ou 'None'
    """
    for nome, numeros in SETORES.items():
        if numero in numeros:
            return nome
    return 'None'


def get_cor(numero: int) -> str:
    """
    Retorna a cor de um número

    Returns:
        'zero', 'vermelho' ou 'preto'
    """
    if numero == 0:
        return 'zero'
    elif numero in VERMELHOS:
        return 'vermelho'
    return 'preto'


def get_duzia(numero: int) -> int:
    """Retorna a dúzia (1, 2, 3) ou 0 para o zero"""
    if numero == 0:
        return 0
    return ((numero - 1) // 12) + 1


def get_coluna(numero: int) -> int:
    """Retorna a coluna (1, 2, 3) ou 0 para o zero"""
    if numero == 0:
        return 0
    return ((numero - 1) % 3) + 1


def get_paridade(numero: int) -> str:
    """
    Retorna a paridade de um número

    Returns:
        'zero', 'par' ou 'impar'
    """
    if numero == 0:
        return 'zero'
    return 'par' if numero % 2 == 0 else 'impar'


# ========== VALIDAÇÃO ==========

def is_valid_number(numero) -> bool:
    """True se for um inteiro da roleta (0-36); bool não conta"""
    return isinstance(numero, int) and not isinstance(numero, bool) and 0 <= numero <= 36


# ========== INFORMAÇÕES ==========

TOTAL_NUMEROS = 37  # 0-36

# ========== MOTOR DE ESTRATÉGIAS ==========
# Valores que influenciam o resultado ficam aqui (e não no .env)
# para que uma estratégia compilada seja reproduzível em qualquer processo.

SCHEMA_VERSION_ATUAL = 'v1'
SCHEMA_VERSIONS_SUPORTADAS = ('v1', '1.0.0')

MODOS_SELECAO = ('manual', 'automatic', 'hybrid')
MODO_SELECAO_PADRAO = 'automatic'

GATING_PADRAO: Dict[str, object] = {
    'maxNumbersAuto': 18,
    'maxNumbersHybrid': 24,
    'minManualHybrid': 1,
    'excludeZero': False,
}

CONFIANCA_ATIVA = 0.8
CONFIANCA_INATIVA = 0.1

MOTIVO_ATIVO = 'Lógica satisfeita'
MOTIVO_INATIVO = 'Lógica não satisfeita'
MOTIVO_HIBRIDO = 'Mínimo de números manuais não atingido'
