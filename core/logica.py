"""
core/logica.py

Combinação lógica (AND / OR / NOT) dos resultados das condições
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from core.grafo import NodeType, StrategyGraph

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogicResult:
    node_id: str
    operator: str
    inputs: Tuple[bool, ...]
    result: bool
    nested_logic: bool = False

    def to_dict(self) -> Dict[str, Any]:
        saida = {
            'nodeId': self.node_id,
            'operator': self.operator,
            'inputs': list(self.inputs),
            'result': self.result,
        }
        if self.nested_logic:
            saida['nestedLogic'] = True
        return saida


def combinar(operator: str, inputs: List[bool]) -> bool:
    """
    Aplica o operador às entradas

    AND sem entradas -> False; NOT nega apenas a primeira entrada.
    """
    if not inputs:
        return False
    if operator == 'OR':
        return any(inputs)
    if operator == 'NOT':
        return not inputs[0]
    return all(inputs)


def avaliar_logica(graph: StrategyGraph, condicoes: Dict[str, bool]) -> Dict[str, LogicResult]:
    """
    Avalia todos os nós lógicos do grafo

    Entradas de um nó lógico são as condições ligadas diretamente a ele.
    Lógica aninhada (nó lógico alimentando outro) não é composta:
    o nó resulta False e fica marcado com nestedLogic.

    Args:
        graph: Grafo validado
        condicoes: nodeId da condição -> passed

    Returns:
        nodeId do nó lógico -> LogicResult
    """
    por_id = graph.nodes_by_id
    resultados = {}

    for node in graph.nodes_do_tipo(NodeType.LOGIC):
        entradas = []
        aninhada = False
        for conexao in graph.incoming(node.id):
            origem = por_id.get(conexao.source)
            if origem is None:
                continue
            if origem.type == NodeType.LOGIC:
                aninhada = True
            elif origem.type == NodeType.CONDITION:
                entradas.append(condicoes.get(origem.id, False))

        resultado = False if aninhada else combinar(node.operator, entradas)
        if aninhada:
            logger.debug(f"Nó lógico {node.id} recebe outro nó lógico: resultado forçado False")

        resultados[node.id] = LogicResult(
            node_id=node.id,
            operator=node.operator,
            inputs=tuple(entradas),
            result=resultado,
            nested_logic=aninhada,
        )

    return resultados
