# ========== condicoes/__init__.py ==========
"""
Condições avaliáveis pelos nós do tipo 'condition'
"""

from condicoes.base import BaseCondition, ConditionResult, ConditionType, UnknownCondition
from condicoes.registry import (
    CONDITIONS,
    avaliar_condicao,
    criar_condicao,
    resolver_tipo,
    subtipos_suportados,
)

__all__ = [
    'BaseCondition',
    'ConditionResult',
    'ConditionType',
    'UnknownCondition',
    'CONDITIONS',
    'avaliar_condicao',
    'criar_condicao',
    'resolver_tipo',
    'subtipos_suportados',
]
