# ========== utils/__init__.py ==========
"""
Utilitários do sistema
"""

from utils.constants import (
    RODA,
    VERMELHOS,
    PRETOS,
    VOISINS,
    TIERS,
    ORPHELINS,
    SETORES,
)

from utils.helpers import (
    distancia_circular,
    espelho_roda,
    get_vizinhos_raio,
    get_terminal,
    get_familia_terminal,
    slugify,
)

__all__ = [
    'RODA',
    'VERMELHOS',
    'PRETOS',
    'VOISINS',
    'TIERS',
    'ORPHELINS',
    'SETORES',
    'distancia_circular',
    'espelho_roda',
    'get_vizinhos_raio',
    'get_terminal',
    'get_familia_terminal',
    'slugify',
]
