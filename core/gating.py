"""
core/gating.py

Resolução do sinal e regras de corte (gating) do conjunto final de números
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from core.grafo import GatingConfig, Node, NodeType, StrategyGraph
from utils.helpers import distancia_circular, numeros_validos

logger = logging.getLogger(__name__)

MOTIVO_SINAL_INATIVO = 'signal-inactive'
MOTIVO_MINIMO_HIBRIDO = 'hybrid-min-manual-not-met'
MOTIVO_EXCLUI_ZERO = 'exclude-zero'
MOTIVO_LIMITE = 'max-numbers-limit'


@dataclass(frozen=True)
class DerivationContribution:
    """Números contribuídos por uma condição que passou"""
    node_id: str
    subtype: str
    reason: str
    numbers: Tuple[int, ...]
    params: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'nodeId': self.node_id,
            'subtype': self.subtype,
            'reason': self.reason,
            'numbers': list(self.numbers),
            'params': dict(self.params),
        }


@dataclass(frozen=True)
class SinalResolvido:
    active: bool
    node: Optional[Node]
    inputs: Tuple[bool, ...] = ()

    @property
    def numeros_manuais(self) -> List[int]:
        return self.node.numeros_manuais if self.node is not None else []


@dataclass(frozen=True)
class GatingOutcome:
    numbers: List[int]
    gating_applied: Dict[str, Any]
    halted: bool = False


def resolver_sinal(
    graph: StrategyGraph,
    condicoes: Dict[str, bool],
    logicos: Dict[str, bool],
) -> SinalResolvido:
    """
    Um nó de sinal fica ativo se alguma condição ou nó lógico ligado
    diretamente a ele avaliou True

    Os números manuais vêm do sinal ativo (ou do primeiro sinal do grafo).
    """
    por_id = graph.nodes_by_id
    sinais = graph.nodes_do_tipo(NodeType.SIGNAL)

    for sinal in sinais:
        entradas = []
        for conexao in graph.incoming(sinal.id):
            origem = por_id.get(conexao.source)
            if origem is None:
                continue
            if origem.type == NodeType.CONDITION:
                entradas.append(condicoes.get(origem.id, False))
            elif origem.type == NodeType.LOGIC:
                entradas.append(logicos.get(origem.id, False))
        if any(entradas):
            return SinalResolvido(active=True, node=sinal, inputs=tuple(entradas))

    return SinalResolvido(active=False, node=sinais[0] if sinais else None)


def truncar_por_proximidade(numeros: List[int], limite: int, referencia: Optional[int]) -> List[int]:
    """
    Mantém os `limite` números mais próximos (na roda) da referência

    Empate pela ordem numérica; sem referência corta em ordem crescente.

    Exemplo:
        truncar_por_proximidade([0, 10, 26, 32], 2, 0) -> [0, 26]
    """
    ordenados = sorted(numeros)
    if len(ordenados) <= limite:
        return ordenados
    if referencia is None:
        return ordenados[:limite]

    ranking = sorted(ordenados, key=lambda n: (distancia_circular(n, referencia), n))
    return sorted(ranking[:limite])


def aplicar_gating(
    derivados: List[int],
    manuais: List[int],
    modo: str,
    config: GatingConfig,
    signal_active: bool,
    ultimo: Optional[int] = None,
) -> GatingOutcome:
    """
    Aplica as regras em ordem:

    1. sinal inativo -> vazio
    2. modo manual usa só os números do sinal; híbrido une os dois
    3. híbrido abaixo do mínimo de números manuais -> vazio (interrompe)
    4. excludeZero
    5. limite de quantidade (auto / híbrido; manual não tem limite)
    """
    regras = config.to_dict()
    motivos: List[str] = []

    def _aplicado(pre: int, numeros: List[int]) -> Dict[str, Any]:
        return {
            'gated': bool(motivos),
            'reasons': list(motivos),
            'preCount': pre,
            'postCount': len(numeros),
            'rules': regras,
            'mode': modo,
        }

    if not signal_active:
        motivos.append(MOTIVO_SINAL_INATIVO)
        return GatingOutcome(numbers=[], gating_applied=_aplicado(0, []))

    if modo == 'manual':
        candidatos = numeros_validos(manuais)
    elif modo == 'hybrid':
        candidatos = numeros_validos(list(derivados) + list(manuais))
    else:
        candidatos = numeros_validos(derivados)
    pre = len(candidatos)

    if modo == 'hybrid' and len(numeros_validos(manuais)) < config.min_manual_hybrid:
        motivos.append(MOTIVO_MINIMO_HIBRIDO)
        return GatingOutcome(numbers=[], gating_applied=_aplicado(pre, []), halted=True)

    if config.exclude_zero and 0 in candidatos:
        candidatos = [n for n in candidatos if n != 0]
        motivos.append(MOTIVO_EXCLUI_ZERO)

    limite = None
    if modo == 'automatic':
        limite = config.max_numbers_auto
    elif modo == 'hybrid':
        limite = config.max_numbers_hybrid

    if limite is not None and len(candidatos) > limite:
        candidatos = truncar_por_proximidade(candidatos, limite, ultimo)
        motivos.append(MOTIVO_LIMITE)

    numeros = sorted(candidatos)
    logger.debug(f"Gating {modo}: {pre} -> {len(numeros)} números ({motivos})")
    return GatingOutcome(numbers=numeros, gating_applied=_aplicado(pre, numeros))
