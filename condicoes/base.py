"""
condicoes/base.py

Classe base abstrata para todas as condições do builder
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from core.historico import Token, normalizar_token
from utils.constants import VERMELHOS, PRETOS, PARES, IMPARES, SEM_ZERO
from utils.helpers import clamp_float, clamp_int, numeros_validos


class ConditionType(Enum):
    """Variantes de condição suportadas pelo motor"""
    REPETITION = "repetition"
    ABSENCE = "absence"
    TREND = "trend"
    NEIGHBORS = "neighbors"
    MIRROR = "mirror"
    SPECIFIC_NUMBER = "specific-number"
    REPEAT_NUMBER = "repeat-number"
    ALTERNATION = "alternation"
    SETOR_DOMINANTE = "setorDominante"
    DOZEN_HOT = "dozen_hot"
    COLUMN_HOT = "column_hot"
    SEQUENCE_CUSTOM = "sequence_custom"
    RECENT_IN_SET = "recent-in-set"
    ADJACENT_IN_LIST = "adjacent-in-list"
    TERMINAL_PATTERN = "terminal-pattern"
    BREAK = "break"
    TIME_WINDOW = "time-window"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ConditionResult:
    """
    Resultado da avaliação de uma condição

    Attributes:
        passed: Se a condição foi satisfeita
        numbers: Números contribuídos (ordenados, sem repetição)
        reason: Identificador curto do motivo da contribuição
        params: Parâmetros efetivos usados (para o trace)
    """
    passed: bool
    numbers: List[int] = field(default_factory=list)
    reason: str = ""
    params: Dict[str, Any] = field(default_factory=dict)


def numeros_da_categoria(evento: Any) -> List[int]:
    """
    Conjunto de números de um evento/categoria

    Exemplo:
        numeros_da_categoria('zero') -> [0]
        numeros_da_categoria('numero:17') -> [17]
    """
    if isinstance(evento, int) and not isinstance(evento, bool):
        return numeros_validos([evento])

    e = str(evento or '').strip().lower()
    if e in ('vermelho', 'red'):
        return list(VERMELHOS)
    if e in ('preto', 'black'):
        return list(PRETOS)
    if e in ('zero', '0'):
        return [0]
    if e == 'par':
        return list(PARES)
    if e in ('impar', 'ímpar'):
        return list(IMPARES)
    if e.startswith('numero:'):
        e = e.split(':', 1)[1]
    try:
        return numeros_validos([int(e)])
    except ValueError:
        return []


def ler_numero(valor: Any) -> Optional[int]:
    """Número da roleta vindo da configuração (aceita "17" e 17.0), ou None"""
    token = normalizar_token(valor)
    return token if isinstance(token, int) else None


def complemento_da_categoria(evento: str) -> List[int]:
    """Categoria oposta: vermelho <-> preto, par <-> impar, zero -> 1-36"""
    e = str(evento or '').strip().lower()
    if e in ('vermelho', 'red'):
        return list(PRETOS)
    if e in ('preto', 'black'):
        return list(VERMELHOS)
    if e == 'zero':
        return list(SEM_ZERO)
    if e == 'par':
        return list(IMPARES)
    if e in ('impar', 'ímpar'):
        return list(PARES)
    return []


class BaseCondition(ABC):
    """
    Classe base abstrata para todas as condições

    Cada condição lê e valida a própria configuração no __init__
    (valores fora do intervalo são limitados, nunca rejeitados)
    e implementa evaluate().
    """

    tipo: ConditionType = ConditionType.UNKNOWN

    def __init__(self, config: Optional[Dict[str, Any]] = None, subtype: str = ""):
        """
        Args:
            config: Configuração crua do nó (chaves do builder)
            subtype: Subtipo como veio no grafo (mantido para o trace)
        """
        self.config = config or {}
        self.subtype = subtype or self.tipo.value
        self.name = self.__class__.__name__

    @abstractmethod
    def evaluate(self, history: List[Token]) -> ConditionResult:
        """
        Avalia a condição sobre o histórico

        Args:
            history: Tokens normalizados (mais recente por último)

        Returns:
            ConditionResult; nunca levanta exceção para "não casou"
        """
        raise NotImplementedError(
            f"A condição {self.name} deve implementar o método evaluate()"
        )

    # ---------- leitura de configuração ----------

    def get_config_value(self, *keys: str, default: Any = None) -> Any:
        """Primeira chave presente (aceita nomes alternativos do builder)"""
        for key in keys:
            if key in self.config and self.config[key] is not None:
                return self.config[key]
        return default

    def get_int(self, *keys: str, default: int, minimo: int = 0, maximo: int = 10_000) -> int:
        return clamp_int(self.get_config_value(*keys), minimo, maximo, default)

    def get_float(self, *keys: str, default: float, minimo: float = 0.0, maximo: float = 1.0) -> float:
        return clamp_float(self.get_config_value(*keys), minimo, maximo, default)

    def get_bool(self, *keys: str, default: bool) -> bool:
        valor = self.get_config_value(*keys)
        if valor is None:
            return default
        if isinstance(valor, str):
            return valor.strip().lower() in ('true', '1', 'sim', 'yes')
        return bool(valor)

    def get_str(self, *keys: str, default: str) -> str:
        valor = self.get_config_value(*keys)
        if valor is None:
            return default
        texto = str(valor).strip()
        return texto.lower() if texto else default

    def get_list(self, *keys: str) -> List[Any]:
        valor = self.get_config_value(*keys)
        return list(valor) if isinstance(valor, (list, tuple)) else []

    # ---------- resultados ----------

    def no_match(self, **params: Any) -> ConditionResult:
        return ConditionResult(passed=False, params=params)

    def match(self, numbers: List[int], reason: str, **params: Any) -> ConditionResult:
        return ConditionResult(
            passed=True,
            numbers=numeros_validos(numbers),
            reason=reason,
            params=params,
        )

    def __str__(self) -> str:
        return f"{self.name}(config={self.config})"

    def __repr__(self) -> str:
        return self.__str__()


class UnknownCondition(BaseCondition):
    """Subtipo não reconhecido: sempre falso, sem contribuição"""

    tipo = ConditionType.UNKNOWN

    def evaluate(self, history: List[Token]) -> ConditionResult:
        return self.no_match(subtype=self.subtype)
