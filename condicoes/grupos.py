"""
condicoes/grupos.py

Dúzias e colunas "quentes"
"""

from collections import Counter
from typing import Callable, List

from condicoes.base import BaseCondition, ConditionResult, ConditionType
from core.historico import Token, apenas_numeros
from utils.constants import DUZIAS, COLUNAS, get_coluna, get_duzia


class _GrupoQuenteCondition(BaseCondition):
    """Todo grupo com pelo menos `frequenciaMinima` acertos na janela contribui"""

    grupos: List[List[int]] = []
    rotulo = "grupo"
    # número -> índice do grupo (1..N), 0 para o zero
    classificar: Callable[[int], int] = staticmethod(lambda n: 0)

    def __init__(self, config=None, subtype=""):
        super().__init__(config, subtype)
        self.janela = self.get_int('janela', 'window', default=12, minimo=1)
        self.frequencia_minima = self.get_int('frequenciaMinima', default=5, minimo=1)

    def evaluate(self, history: List[Token]) -> ConditionResult:
        params = {'janela': self.janela, 'frequenciaMinima': self.frequencia_minima}
        if len(history) < self.janela:
            return self.no_match(**params)

        recentes = apenas_numeros(history[-self.janela:])
        contagem = Counter(self.classificar(n) for n in recentes)
        quentes = []
        numeros = []
        for idx, grupo in enumerate(self.grupos, start=1):
            if contagem[idx] >= self.frequencia_minima:
                quentes.append(idx)
                numeros.extend(grupo)

        params[self.rotulo] = quentes
        if not quentes:
            return self.no_match(**params)
        return self.match(numeros, f"{self.tipo.value}:{','.join(map(str, quentes))}", **params)


class DozenHotCondition(_GrupoQuenteCondition):
    tipo = ConditionType.DOZEN_HOT
    grupos = DUZIAS
    rotulo = "duzias"
    classificar = staticmethod(get_duzia)


class ColumnHotCondition(_GrupoQuenteCondition):
    tipo = ConditionType.COLUMN_HOT
    grupos = COLUNAS
    rotulo = "colunas"
    classificar = staticmethod(get_coluna)
