"""
core/compilador.py

Compilador do builder: grafo + metadados -> estratégia compilada

A estratégia compilada não gera código. O artefato é o próprio grafo
serializado como dados (JSON) com os metadados e um checksum SHA-256;
ao carregar, o mesmo pipeline de core/avaliador.py é reutilizado.
"""

import copy
import hashlib
import json
import logging
from typing import Any, Dict, List, Optional

from core.avaliador import EvaluationResult, avaliar_estrategia
from core.grafo import (
    GatingConfig,
    GraphValidationError,
    StrategyGraph,
    carregar_grafo,
    normalizar_modo,
)
from utils.constants import SCHEMA_VERSION_ATUAL, SCHEMA_VERSIONS_SUPORTADAS
from utils.helpers import slugify

logger = logging.getLogger(__name__)

FORMATO_ARTEFATO = 'strategy-artifact'
MAX_NOME = 128


class ArtifactError(ValueError):
    """Artefato corrompido, adulterado ou de versão incompatível"""


class CompiledStrategy:
    """
    Estratégia compilada: grafo fixo + metadados

    Exposta com os nomes do runtime de estratégias (checkStrategy,
    generateSignal, METADATA) e com os equivalentes em snake_case.
    """

    def __init__(self, graph: StrategyGraph, metadata: Dict[str, Any]):
        self._graph = graph
        self._metadata = dict(metadata)

    @property
    def graph(self) -> StrategyGraph:
        """Cópia do grafo; alterá-la não afeta a estratégia compilada"""
        return self._graph.model_copy(deep=True)

    @property
    def METADATA(self) -> Dict[str, Any]:
        return json.loads(json.dumps(self._metadata))

    @property
    def name(self) -> str:
        return self._metadata['name']

    @property
    def slug(self) -> str:
        return slugify(self.name) or 'estrategia'

    def avaliar(self, history: List[Any], ctx: Optional[Dict[str, Any]] = None) -> EvaluationResult:
        return avaliar_estrategia(self._graph, history, ctx)

    def check_strategy(self, history: List[Any], ctx: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """{shouldActivate, confidence, reason, telemetry}"""
        return self.avaliar(history, ctx).check_result()

    def generate_signal(self, history: List[Any], ctx: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """{numbers, confidence, metadata}"""
        return self.avaliar(history, ctx).signal_result()

    checkStrategy = check_strategy
    generateSignal = generate_signal

    def to_dict(self) -> Dict[str, Any]:
        return {
            'metadata': self.METADATA,
            'graph': {
                'nodes': [n.model_dump(mode='json') for n in self._graph.nodes],
                'connections': [c.model_dump(mode='json') for c in self._graph.connections],
            },
        }

    def __repr__(self) -> str:
        return f"CompiledStrategy(name={self.name!r}, nodes={len(self._graph.nodes)})"


def _metadados(payload: Dict[str, Any]) -> Dict[str, Any]:
    gating = GatingConfig.from_dict(payload.get('gating') if isinstance(payload.get('gating'), dict) else None)
    return {
        'name': str(payload.get('name') or 'Estrategia_Sem_Nome'),
        'description': str(payload.get('description') or 'Estratégia criada via Builder'),
        'version': str(payload.get('version') or '1.0.0'),
        'author': str(payload.get('author') or 'SOFIA Builder'),
        'category': str(payload.get('category') or 'dynamic'),
        'min_spins': payload.get('min_spins') or 10,
        'max_numbers': payload.get('max_numbers') or 6,
        'confidence_threshold': payload.get('confidence_threshold') or 0.6,
        'priority': payload.get('priority') or 1,
        'selectionMode': normalizar_modo(payload.get('selectionMode')),
        'gating': gating.to_dict(),
        'schemaVersion': str(payload.get('schemaVersion') or SCHEMA_VERSION_ATUAL),
    }


def compilar_estrategia(payload: Dict[str, Any]) -> CompiledStrategy:
    """
    Valida o payload do builder e compila a estratégia

    Args:
        payload: {name, description, ..., selectionMode, gating,
                  schemaVersion, nodes, connections}

    Returns:
        CompiledStrategy

    Raises:
        GraphValidationError: versão de schema, nome ou grafo inválidos
    """
    if not isinstance(payload, dict):
        raise GraphValidationError("Payload de compilação deve ser um objeto", ["payload não é um objeto JSON"])

    metadata = _metadados(payload)

    problemas = []
    if metadata['schemaVersion'] not in SCHEMA_VERSIONS_SUPORTADAS:
        problemas.append(
            f"schemaVersion '{metadata['schemaVersion']}' não suportada "
            f"(suportadas: {', '.join(SCHEMA_VERSIONS_SUPORTADAS)})"
        )
    if len(metadata['name']) > MAX_NOME:
        problemas.append(f"Nome da estratégia excede {MAX_NOME} caracteres")
    if problemas:
        raise GraphValidationError("Estratégia inválida", problemas)

    graph = carregar_grafo({
        **copy.deepcopy(payload),
        'name': metadata['name'],
        'description': metadata['description'],
        'version': metadata['version'],
        'selectionMode': metadata['selectionMode'],
        'gating': metadata['gating'],
        'schemaVersion': metadata['schemaVersion'],
    })

    logger.info(
        f"✅ Estratégia compilada: {metadata['name']} "
        f"({len(graph.nodes)} nós, {len(graph.connections)} conexões, modo {metadata['selectionMode']})"
    )
    return CompiledStrategy(graph, metadata)


# ========== ARTEFATO ==========

def _checksum(corpo: Dict[str, Any]) -> str:
    canonico = json.dumps(corpo, sort_keys=True, ensure_ascii=False, separators=(',', ':'))
    return hashlib.sha256(canonico.encode('utf-8')).hexdigest()


def exportar_artefato(estrategia: CompiledStrategy) -> str:
    """
    Serializa a estratégia compilada em JSON (chaves ordenadas + checksum)

    O mesmo grafo e os mesmos metadados sempre geram o mesmo texto.
    """
    corpo = estrategia.to_dict()
    artefato = {
        'format': FORMATO_ARTEFATO,
        **corpo,
        'checksum': _checksum(corpo),
    }
    return json.dumps(artefato, sort_keys=True, ensure_ascii=False, indent=2)


def carregar_artefato(texto: str) -> CompiledStrategy:
    """
    Reconstrói a estratégia a partir do artefato exportado

    Raises:
        ArtifactError: JSON inválido, formato desconhecido, checksum divergente
            ou schemaVersion não suportada
    """
    try:
        artefato = json.loads(texto)
    except (TypeError, ValueError) as e:
        raise ArtifactError(f"Artefato não é um JSON válido: {e}") from e

    if not isinstance(artefato, dict) or artefato.get('format') != FORMATO_ARTEFATO:
        raise ArtifactError("Formato de artefato desconhecido")

    metadata = artefato.get('metadata')
    graph = artefato.get('graph')
    if not isinstance(metadata, dict) or not isinstance(graph, dict):
        raise ArtifactError("Artefato sem 'metadata' ou 'graph'")

    if _checksum({'metadata': metadata, 'graph': graph}) != artefato.get('checksum'):
        raise ArtifactError("Checksum do artefato não confere (arquivo alterado ou corrompido)")

    if metadata.get('schemaVersion') not in SCHEMA_VERSIONS_SUPORTADAS:
        raise ArtifactError(f"schemaVersion incompatível: {metadata.get('schemaVersion')}")

    try:
        estrategia = compilar_estrategia({**metadata, **graph})
    except GraphValidationError as e:
        raise ArtifactError(f"Grafo do artefato inválido: {'; '.join(e.problemas)}") from e

    logger.debug(f"Artefato carregado: {estrategia.name}")
    return estrategia


def nome_arquivo_artefato(name: str) -> str:
    """
    Exemplo:
        nome_arquivo_artefato('Espelhos SOFIA') -> 'espelhos-sofia.strategy.json'
    """
    return f"{slugify(name) or 'estrategia'}.strategy.json"
