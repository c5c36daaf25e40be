"""
condicoes/registry.py

Registro de condições: subtipo do nó -> classe avaliadora
"""

import logging
from typing import Any, Dict, List, Optional, Type

from condicoes.base import BaseCondition, ConditionResult, ConditionType, UnknownCondition
from condicoes.categorias import (
    AbsenceCondition,
    AlternationCondition,
    BreakCondition,
    RepetitionCondition,
    TimeWindowCondition,
    TrendCondition,
)
from condicoes.grupos import ColumnHotCondition, DozenHotCondition
from condicoes.numeros import (
    AdjacentInListCondition,
    RecentInSetCondition,
    RepeatNumberCondition,
    SequenceCustomCondition,
    SpecificNumberCondition,
)
from condicoes.roda import MirrorCondition, NeighborsCondition, SectorCondition
from condicoes.terminais import TerminalPatternCondition
from core.historico import Token

logger = logging.getLogger(__name__)

CONDITIONS: Dict[ConditionType, Type[BaseCondition]] = {
    ConditionType.REPETITION: RepetitionCondition,
    ConditionType.ABSENCE: AbsenceCondition,
    ConditionType.TREND: TrendCondition,
    ConditionType.NEIGHBORS: NeighborsCondition,
    ConditionType.MIRROR: MirrorCondition,
    ConditionType.SPECIFIC_NUMBER: SpecificNumberCondition,
    ConditionType.REPEAT_NUMBER: RepeatNumberCondition,
    ConditionType.ALTERNATION: AlternationCondition,
    ConditionType.SETOR_DOMINANTE: SectorCondition,
    ConditionType.DOZEN_HOT: DozenHotCondition,
    ConditionType.COLUMN_HOT: ColumnHotCondition,
    ConditionType.SEQUENCE_CUSTOM: SequenceCustomCondition,
    ConditionType.RECENT_IN_SET: RecentInSetCondition,
    ConditionType.ADJACENT_IN_LIST: AdjacentInListCondition,
    ConditionType.TERMINAL_PATTERN: TerminalPatternCondition,
    ConditionType.BREAK: BreakCondition,
    ConditionType.TIME_WINDOW: TimeWindowCondition,
}

# Nomes alternativos usados pelo builder e por estratégias antigas
ALIASES: Dict[str, ConditionType] = {
    'sector': ConditionType.SETOR_DOMINANTE,
    'frequency': ConditionType.TREND,
    'pattern': ConditionType.SEQUENCE_CUSTOM,
    'sequence': ConditionType.SEQUENCE_CUSTOM,
}

_POR_NOME: Dict[str, ConditionType] = {
    **{tipo.value.lower(): tipo for tipo in ConditionType},
    **ALIASES,
}


def resolver_tipo(subtype: Optional[str]) -> ConditionType:
    """
    Resolve o subtipo (sem diferenciar maiúsculas) para o ConditionType

    Exemplo:
        resolver_tipo('SetorDominante') -> ConditionType.SETOR_DOMINANTE
        resolver_tipo('xyz') -> ConditionType.UNKNOWN
    """
    return _POR_NOME.get(str(subtype or '').strip().lower(), ConditionType.UNKNOWN)


def criar_condicao(subtype: Optional[str], config: Optional[Dict[str, Any]] = None) -> BaseCondition:
    """Instancia a condição para um nó do grafo"""
    tipo = resolver_tipo(subtype)
    classe = CONDITIONS.get(tipo, UnknownCondition)
    if classe is UnknownCondition:
        logger.debug(f"Subtipo de condição desconhecido: {subtype!r}")
    return classe(config or {}, subtype=str(subtype or ''))


def avaliar_condicao(
    subtype: Optional[str],
    config: Optional[Dict[str, Any]],
    history: List[Token],
) -> ConditionResult:
    """Atalho: cria e avalia a condição"""
    return criar_condicao(subtype, config).evaluate(history)


def subtipos_suportados() -> List[str]:
    return sorted(tipo.value for tipo in CONDITIONS)
