"""
core/avaliador.py

Pipeline único de avaliação: histórico -> condições -> lógica -> sinal/gating

Usado tanto pela avaliação ao vivo (rota /avaliar) quanto pelas estratégias
compiladas. Cada chamada monta o próprio trace; nada é guardado entre chamadas.
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from condicoes import criar_condicao
from core.gating import DerivationContribution, SinalResolvido, aplicar_gating, resolver_sinal
from core.grafo import NodeType, StrategyGraph, normalizar_modo
from core.historico import normalizar_historico, ultimo_numero
from core.logica import LogicResult, avaliar_logica
from utils.constants import (
    CONFIANCA_ATIVA,
    CONFIANCA_INATIVA,
    MOTIVO_ATIVO,
    MOTIVO_HIBRIDO,
    MOTIVO_INATIVO,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvaluationTrace:
    """Registro serializável de por que a decisão foi tomada"""
    selection_mode: str
    condition_results: Tuple[Dict[str, Any], ...]
    logic_trace: Tuple[LogicResult, ...]
    derived_by: Tuple[DerivationContribution, ...]
    gating_applied: Dict[str, Any]
    inputs: Dict[str, Any]
    graph_wiring: Dict[str, Any]
    signal_active: bool
    derived_count: int
    signal_inputs: Tuple[bool, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        logic = [r.to_dict() for r in self.logic_trace]
        if self.signal_active:
            logic.append({
                'nodeId': self.inputs.get('signalNodeId'),
                'type': 'signal',
                'inputs': list(self.signal_inputs),
                'result': True,
            })
        return copy.deepcopy({
            'selectionModeEvaluated': self.selection_mode,
            'conditionResults': list(self.condition_results),
            'logicTrace': logic,
            'derivedBy': [c.to_dict() for c in self.derived_by],
            'graphWiring': self.graph_wiring,
            'inputs': self.inputs,
            'gatingApplied': self.gating_applied,
            'decisionTrace': {
                'signalActive': self.signal_active,
                'producedCount': self.derived_count,
                'gating': {
                    'gated': self.gating_applied.get('gated', False),
                    'reasons': list(self.gating_applied.get('reasons', [])),
                },
            },
            'signalActive': self.signal_active,
            'derivedCount': self.derived_count,
        })


@dataclass(frozen=True)
class EvaluationResult:
    numbers: List[int]
    confidence: float
    should_activate: bool
    reason: str
    selection_mode: str
    trace: EvaluationTrace
    derived: List[int] = field(default_factory=list)

    @property
    def gating_applied(self) -> Dict[str, Any]:
        return copy.deepcopy(self.trace.gating_applied)

    def check_result(self) -> Dict[str, Any]:
        """Formato checkStrategy: {shouldActivate, confidence, reason, telemetry}"""
        return copy.deepcopy({
            'shouldActivate': self.should_activate,
            'confidence': self.confidence,
            'reason': self.reason,
            'telemetry': self.trace.to_dict(),
        })

    def signal_result(self) -> Dict[str, Any]:
        """Formato generateSignal: {numbers, confidence, metadata}"""
        return copy.deepcopy({
            'numbers': list(self.numbers),
            'confidence': self.confidence,
            'metadata': {
                'selectionMode': self.selection_mode,
                'gatingApplied': self.gating_applied,
                'telemetry': self.trace.to_dict(),
            },
        })

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy({
            'shouldActivate': self.should_activate,
            'numbers': list(self.numbers),
            'confidence': self.confidence,
            'reason': self.reason,
            'metadata': {
                'selectionMode': self.selection_mode,
                'gatingApplied': self.gating_applied,
                'telemetry': self.trace.to_dict(),
            },
        })


def _ligacoes(graph: StrategyGraph) -> Dict[str, Any]:
    por_id = graph.nodes_by_id
    sinais = {n.id for n in graph.nodes_do_tipo(NodeType.SIGNAL)}
    return {
        'nodes': len(graph.nodes),
        'connections': len(graph.connections),
        'conditions': len(graph.nodes_do_tipo(NodeType.CONDITION)),
        'logic': len(graph.nodes_do_tipo(NodeType.LOGIC)),
        'signals': len(sinais),
        'signalInputs': sorted(
            c.source for c in graph.connections
            if c.target in sinais and c.source in por_id
        ),
    }


def avaliar_estrategia(
    graph: StrategyGraph,
    history: List[Any],
    ctx: Optional[Dict[str, Any]] = None,
) -> EvaluationResult:
    """
    Avalia o grafo contra o histórico

    Args:
        graph: Grafo já validado (carregar_grafo)
        history: Giros brutos ou tokens, mais recente por último
        ctx: Override opcional {selectionMode, gating}

    Returns:
        EvaluationResult imutável com o trace completo
    """
    ctx = ctx or {}
    tokens = normalizar_historico(history)
    modo = normalizar_modo(ctx.get('selectionMode'), padrao=graph.selectionMode)
    gating = graph.gating_config.merge(ctx.get('gating') if isinstance(ctx.get('gating'), dict) else None)

    # 1. condições
    condicoes: Dict[str, bool] = {}
    resultados = []
    contribuicoes = []
    for node in graph.nodes_do_tipo(NodeType.CONDITION):
        condicao = criar_condicao(node.subtype, node.config)
        resultado = condicao.evaluate(tokens)
        condicoes[node.id] = resultado.passed
        resultados.append({
            'nodeId': node.id,
            'subtype': node.subtype,
            'passed': resultado.passed,
            'numbers': list(resultado.numbers),
            'params': dict(resultado.params),
        })
        if resultado.passed and resultado.numbers:
            contribuicoes.append(DerivationContribution(
                node_id=node.id,
                subtype=condicao.tipo.value,
                reason=resultado.reason,
                numbers=tuple(resultado.numbers),
                params=dict(resultado.params),
            ))

    # 2. lógica
    logica = avaliar_logica(graph, condicoes)

    # 3. sinal + gating
    sinal: SinalResolvido = resolver_sinal(
        graph, condicoes, {node_id: r.result for node_id, r in logica.items()}
    )
    derivados = sorted({n for c in contribuicoes for n in c.numbers})
    ultimo = ultimo_numero(tokens)
    desfecho = aplicar_gating(
        derivados,
        sinal.numeros_manuais,
        modo,
        gating,
        signal_active=sinal.active,
        ultimo=ultimo,
    )

    should_activate = bool(desfecho.numbers)
    if should_activate:
        motivo = MOTIVO_ATIVO
    elif desfecho.halted:
        motivo = MOTIVO_HIBRIDO
    else:
        motivo = MOTIVO_INATIVO

    trace = EvaluationTrace(
        selection_mode=modo,
        condition_results=tuple(resultados),
        logic_trace=tuple(logica.values()),
        derived_by=tuple(contribuicoes),
        gating_applied=desfecho.gating_applied,
        inputs={
            'historyLength': len(tokens),
            'lastNumber': ultimo,
            'manualNumbers': sinal.numeros_manuais,
            'signalNodeId': sinal.node.id if sinal.node is not None else None,
        },
        graph_wiring=_ligacoes(graph),
        signal_active=sinal.active,
        derived_count=len(derivados),
        signal_inputs=sinal.inputs,
    )

    logger.debug(
        f"Estratégia '{graph.name}' ({modo}): sinal={'ativo' if sinal.active else 'inativo'}, "
        f"{len(derivados)} derivados -> {len(desfecho.numbers)} finais"
    )

    return EvaluationResult(
        numbers=desfecho.numbers,
        confidence=CONFIANCA_ATIVA if should_activate else CONFIANCA_INATIVA,
        should_activate=should_activate,
        reason=motivo,
        selection_mode=modo,
        trace=trace,
        derived=derivados,
    )
