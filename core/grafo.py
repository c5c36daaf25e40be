"""
core/grafo.py

Modelo do grafo de estratégia (nós + conexões) e validação estrutural

Aceita o formato plano {id, type, subtype, config} e o formato do builder
{id, type, data: {label, conditionType, config}}. Os modelos são imutáveis:
o motor nunca altera o grafo recebido.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from utils.constants import (
    GATING_PADRAO,
    MODO_SELECAO_PADRAO,
    MODOS_SELECAO,
    SCHEMA_VERSION_ATUAL,
)
from utils.helpers import clamp_int, numeros_validos

logger = logging.getLogger(__name__)

OPERADORES = ('AND', 'OR', 'NOT')


class GraphValidationError(ValueError):
    """Grafo malformado (ids duplicados, conexões órfãs, campos inválidos)"""

    def __init__(self, message: str, problemas: Optional[List[str]] = None):
        super().__init__(message)
        self.problemas = problemas or []


class NodeType(str, Enum):
    TRIGGER = "trigger"
    CONDITION = "condition"
    LOGIC = "logic"
    SIGNAL = "signal"


class ConnectionKind(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    CONDITION = "condition"


# ========== GATING ==========

def _bool(valor: Any, padrao: bool) -> bool:
    if valor is None:
        return padrao
    if isinstance(valor, str):
        return valor.strip().lower() in ('true', '1', 'sim', 'yes')
    return bool(valor)


@dataclass(frozen=True)
class GatingConfig:
    """
    Regras de corte aplicadas ao conjunto final de números

    Contagens limitadas a 1-36; valores não numéricos voltam ao padrão.
    """
    max_numbers_auto: int = GATING_PADRAO['maxNumbersAuto']
    max_numbers_hybrid: int = GATING_PADRAO['maxNumbersHybrid']
    min_manual_hybrid: int = GATING_PADRAO['minManualHybrid']
    exclude_zero: bool = GATING_PADRAO['excludeZero']

    @classmethod
    def from_dict(cls, raw: Optional[Dict[str, Any]]) -> "GatingConfig":
        raw = raw or {}
        return cls(
            max_numbers_auto=clamp_int(raw.get('maxNumbersAuto'), 1, 36, GATING_PADRAO['maxNumbersAuto']),
            max_numbers_hybrid=clamp_int(raw.get('maxNumbersHybrid'), 1, 36, GATING_PADRAO['maxNumbersHybrid']),
            min_manual_hybrid=clamp_int(raw.get('minManualHybrid'), 1, 36, GATING_PADRAO['minManualHybrid']),
            exclude_zero=_bool(raw.get('excludeZero'), GATING_PADRAO['excludeZero']),
        )

    def merge(self, override: Optional[Dict[str, Any]]) -> "GatingConfig":
        """Aplica o override do contexto de avaliação; chaves com None são ignoradas"""
        override = {k: v for k, v in (override or {}).items() if v is not None}
        if not override:
            return self
        return GatingConfig.from_dict({**self.to_dict(), **override})

    def to_dict(self) -> Dict[str, Any]:
        return {
            'maxNumbersAuto': self.max_numbers_auto,
            'maxNumbersHybrid': self.max_numbers_hybrid,
            'minManualHybrid': self.min_manual_hybrid,
            'excludeZero': self.exclude_zero,
        }


def normalizar_modo(modo: Any, padrao: str = MODO_SELECAO_PADRAO) -> str:
    """manual | automatic | hybrid; qualquer outro valor -> padrão"""
    texto = str(modo or '').strip().lower()
    return texto if texto in MODOS_SELECAO else padrao


# ========== MODELOS ==========

class Node(BaseModel):
    model_config = ConfigDict(frozen=True, extra='ignore')

    id: str
    type: NodeType
    subtype: Optional[str] = None
    config: Dict[str, Any] = Field(default_factory=dict)
    label: Optional[str] = None

    @model_validator(mode='before')
    @classmethod
    def _formato_builder(cls, values: Any) -> Any:
        """Sobe data.config / data.label / data.conditionType para o nó"""
        if not isinstance(values, dict) or not isinstance(values.get('data'), dict):
            return values

        data = values['data']
        values = dict(values)
        config = dict(data.get('config') or {})
        for chave in ('operador', 'operator', 'numeros'):
            if chave in data and chave not in config:
                config[chave] = data[chave]
        values.setdefault('config', config)
        values.setdefault('label', data.get('label'))
        if not values.get('subtype'):
            values['subtype'] = data.get('conditionType') or data.get('subtype')
        return values

    @field_validator('id', mode='before')
    @classmethod
    def _id_texto(cls, v: Any) -> str:
        return str(v) if v is not None else v

    @field_validator('config', mode='before')
    @classmethod
    def _config_dict(cls, v: Any) -> Dict[str, Any]:
        return v if isinstance(v, dict) else {}

    @property
    def operator(self) -> str:
        """Operador do nó lógico (desconhecido -> AND)"""
        valor = self.config.get('operador') or self.config.get('operator') or 'AND'
        valor = str(valor).strip().upper()
        return valor if valor in OPERADORES else 'AND'

    @property
    def numeros_manuais(self) -> List[int]:
        """Números escolhidos à mão no nó de sinal"""
        bruto = self.config.get('numeros', self.config.get('numbers'))
        return numeros_validos(bruto if isinstance(bruto, (list, tuple)) else [])


class Connection(BaseModel):
    model_config = ConfigDict(frozen=True, extra='ignore', populate_by_name=True)

    id: str = ''
    source: str
    target: str
    kind: ConnectionKind = Field(default=ConnectionKind.SUCCESS, alias='type')

    @field_validator('id', 'source', 'target', mode='before')
    @classmethod
    def _texto(cls, v: Any) -> str:
        return str(v) if v is not None else v

    @field_validator('kind', mode='before')
    @classmethod
    def _kind(cls, v: Any) -> str:
        # o canvas grava tipos visuais ('smoothstep', 'default') no mesmo campo
        texto = str(v or '').strip().lower()
        return texto if texto in {k.value for k in ConnectionKind} else ConnectionKind.SUCCESS.value

    @model_validator(mode='before')
    @classmethod
    def _id_padrao(cls, values: Any) -> Any:
        if isinstance(values, dict) and not values.get('id'):
            values = {**values, 'id': f"{values.get('source')}->{values.get('target')}"}
        return values


class StrategyGraph(BaseModel):
    """Grafo completo + metadados usados pelo motor"""

    model_config = ConfigDict(frozen=True, extra='ignore', populate_by_name=True)

    name: str = 'Estrategia_Sem_Nome'
    description: str = ''
    version: str = '1.0.0'
    selectionMode: str = MODO_SELECAO_PADRAO
    gating: Dict[str, Any] = Field(default_factory=dict)
    schemaVersion: str = SCHEMA_VERSION_ATUAL
    nodes: List[Node] = Field(default_factory=list)
    connections: List[Connection] = Field(default_factory=list, alias='edges')

    @field_validator('selectionMode', mode='before')
    @classmethod
    def _modo(cls, v: Any) -> str:
        return normalizar_modo(v)

    @field_validator('gating', mode='before')
    @classmethod
    def _gating(cls, v: Any) -> Dict[str, Any]:
        return v if isinstance(v, dict) else {}

    @field_validator('schemaVersion', 'version', mode='before')
    @classmethod
    def _versao_texto(cls, v: Any) -> Any:
        return str(v) if isinstance(v, (int, float)) else v

    # ---------- consultas ----------

    @property
    def nodes_by_id(self) -> Dict[str, Node]:
        return {node.id: node for node in self.nodes}

    @property
    def gating_config(self) -> GatingConfig:
        return GatingConfig.from_dict(self.gating)

    def nodes_do_tipo(self, tipo: NodeType) -> List[Node]:
        return [node for node in self.nodes if node.type == tipo]

    def incoming(self, node_id: str) -> List[Connection]:
        """Conexões que chegam ao nó"""
        return [c for c in self.connections if c.target == node_id]

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode='json')


# ========== VALIDAÇÃO ==========

def problemas_do_grafo(graph: StrategyGraph) -> List[str]:
    """Lista os problemas estruturais (vazia = grafo válido)"""
    problemas = []

    vistos = set()
    for node in graph.nodes:
        if node.id in vistos:
            problemas.append(f"ID de nó duplicado: {node.id}")
        vistos.add(node.id)

    for conexao in graph.connections:
        if conexao.source not in vistos:
            problemas.append(f"Conexão {conexao.id}: origem inexistente '{conexao.source}'")
        if conexao.target not in vistos:
            problemas.append(f"Conexão {conexao.id}: destino inexistente '{conexao.target}'")

    return problemas


def validar_grafo(graph: StrategyGraph) -> StrategyGraph:
    """
    Rejeita grafos malformados antes de chegarem ao motor

    Raises:
        GraphValidationError: com a lista de problemas encontrados
    """
    problemas = problemas_do_grafo(graph)
    if problemas:
        logger.debug(f"Grafo inválido: {problemas}")
        raise GraphValidationError("Grafo de estratégia inválido", problemas)
    return graph


def carregar_grafo(payload: Union[StrategyGraph, Dict[str, Any]]) -> StrategyGraph:
    """
    Constrói e valida um StrategyGraph a partir do JSON do builder

    Aceita {nodes, connections|edges, ...metadados} ou os nós dentro de 'graph'.
    """
    if isinstance(payload, StrategyGraph):
        return validar_grafo(payload)

    if not isinstance(payload, dict):
        raise GraphValidationError("Payload do grafo deve ser um objeto", ["payload não é um objeto JSON"])

    dados = dict(payload)
    if isinstance(dados.get('graph'), dict):
        dados = {**{k: v for k, v in dados.items() if k != 'graph'}, **dados['graph']}

    try:
        graph = StrategyGraph.model_validate(dados)
    except ValidationError as e:
        problemas = [
            f"{'.'.join(str(p) for p in erro['loc'])}: {erro['msg']}"
            for erro in e.errors()
        ]
        raise GraphValidationError("Grafo de estratégia inválido", problemas) from e

    return validar_grafo(graph)
