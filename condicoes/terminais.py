"""
condicoes/terminais.py

Padrões de terminais (último dígito) nos números recentes
"""

from dataclasses import dataclass
from typing import List, Optional

from condicoes.base import BaseCondition, ConditionResult, ConditionType
from core.historico import Token, apenas_numeros
from utils.helpers import get_familia_terminal, get_terminal, get_vizinhos_raio

PADROES_TERMINAL = ('repeat', 'alternate', 'gap2', 'gap3')


@dataclass
class PadraoTerminal:
    padrao: str
    strength: int
    index: int
    terminal: int


def detectar_padroes(terminais: List[int]) -> List[PadraoTerminal]:
    """
    Lista todos os padrões encontrados na sequência de terminais

    repeat    t[i] == t[i-1]                               força 2
    alternate t[i] == t[i-2], t[i-1] == t[i-3], t[i] != t[i-1]  força 3
    gap2      t[i] == t[i-2], t[i-1] != t[i]               força 2
    gap3      t[i] == t[i-3]                               força 1
    """
    encontrados = []
    for i in range(1, len(terminais)):
        t = terminais
        if t[i] == t[i - 1]:
            encontrados.append(PadraoTerminal('repeat', 2, i, t[i]))
        if i >= 3 and t[i] == t[i - 2] and t[i - 1] == t[i - 3] and t[i] != t[i - 1]:
            encontrados.append(PadraoTerminal('alternate', 3, i, t[i]))
        if i >= 2 and t[i] == t[i - 2] and t[i - 1] != t[i]:
            encontrados.append(PadraoTerminal('gap2', 2, i, t[i]))
        if i >= 3 and t[i] == t[i - 3]:
            encontrados.append(PadraoTerminal('gap3', 1, i, t[i]))
    return encontrados


class TerminalPatternCondition(BaseCondition):
    """
    Padrão de terminais nos últimos `janela` números

    O melhor padrão (maior força, empate pelo mais recente) define o
    terminal; contribui a família do terminal, opcionalmente ampliada
    pelos vizinhos de roda.
    """

    tipo = ConditionType.TERMINAL_PATTERN

    def __init__(self, config=None, subtype=""):
        super().__init__(config, subtype)
        self.janela = self.get_int('janela', 'window', default=12, minimo=2)
        padrao = self.get_str('padrao', 'pattern', default='any')
        self.padrao = padrao if padrao in PADROES_TERMINAL else 'any'
        self.min_strength = self.get_int('minStrength', default=1, minimo=1, maximo=3)
        self.include_neighbors = self.get_bool('includeNeighbors', default=False)
        self.neighbor_radius = self.get_int('neighborRadius', default=1, minimo=0, maximo=18)
        self.include_zero = self.get_bool('includeZero', default=True)

    def melhor_padrao(self, history: List[Token]) -> Optional[PadraoTerminal]:
        terminais = [get_terminal(n) for n in apenas_numeros(history)[-self.janela:]]
        candidatos = [
            p for p in detectar_padroes(terminais)
            if (self.padrao == 'any' or p.padrao == self.padrao) and p.strength >= self.min_strength
        ]
        if not candidatos:
            return None
        return max(candidatos, key=lambda p: (p.strength, p.index))

    def evaluate(self, history: List[Token]) -> ConditionResult:
        params = {'janela': self.janela, 'padrao': self.padrao, 'minStrength': self.min_strength}
        melhor = self.melhor_padrao(history)
        if melhor is None:
            return self.no_match(**params)

        numeros = set(get_familia_terminal(melhor.terminal))
        if self.include_neighbors:
            for n in list(numeros):
                numeros.update(get_vizinhos_raio(n, self.neighbor_radius))
        if not self.include_zero:
            numeros.discard(0)

        params.update({
            'encontrado': melhor.padrao,
            'strength': melhor.strength,
            'terminal': melhor.terminal,
        })
        return self.match(sorted(numeros), f"terminal-pattern:{melhor.padrao}:{melhor.terminal}", **params)
