"""
condicoes/roda.py

Condições baseadas na geometria do cilindro: vizinhos, espelho e setores
"""

import math
from collections import Counter
from typing import List

from condicoes.base import BaseCondition, ConditionResult, ConditionType, ler_numero
from core.historico import Token, apenas_numeros, ultimo_numero
from utils.constants import SETORES, get_setor
from utils.helpers import distancia_circular, espelho_roda, get_vizinhos_raio


class NeighborsCondition(BaseCondition):
    """
    Vizinhos de um número de referência na roda

    Referência: `numero` ou o último número do histórico. Passa quando
    algum número recente (últimos max(2*raio, 12) tokens) está a até
    `raio` casas da referência.
    """

    tipo = ConditionType.NEIGHBORS

    def __init__(self, config=None, subtype=""):
        super().__init__(config, subtype)
        self.numero = ler_numero(self.get_config_value('numero', 'numeroAlvo'))
        self.raio = self.get_int('raio', 'radius', default=2, minimo=0, maximo=18)
        self.include_zero = self.get_bool('includeZero', default=True)

    def evaluate(self, history: List[Token]) -> ConditionResult:
        referencia = self.numero if self.numero is not None else ultimo_numero(history)
        params = {'raio': self.raio, 'includeZero': self.include_zero, 'referencia': referencia}
        if referencia is None:
            return self.no_match(**params)

        janela = max(2 * self.raio, 12)
        recentes = apenas_numeros(history[-janela:])
        if not any(distancia_circular(n, referencia) <= self.raio for n in recentes):
            return self.no_match(**params)

        numeros = get_vizinhos_raio(referencia, self.raio)
        if not self.include_zero:
            numeros = [n for n in numeros if n != 0]
        return self.match(numeros, f"neighbors:{referencia}", **params)


class MirrorCondition(BaseCondition):
    """
    Espelho do último número (18 casas à frente na roda)

    Contribui o espelho e os vizinhos até `raio`. O espelho sempre entra,
    mesmo quando é o 0; `includeZero` vale só para os vizinhos.
    """

    tipo = ConditionType.MIRROR

    def __init__(self, config=None, subtype=""):
        super().__init__(config, subtype)
        self.raio = self.get_int('raio', 'radius', default=0, minimo=0, maximo=18)
        self.include_zero = self.get_bool('includeZero', default=False)

    def evaluate(self, history: List[Token]) -> ConditionResult:
        ultimo = ultimo_numero(history)
        params = {'raio': self.raio, 'includeZero': self.include_zero, 'mirrorOf': ultimo}
        if ultimo is None:
            return self.no_match(**params)

        espelho = espelho_roda(ultimo)
        numeros = set(get_vizinhos_raio(espelho, self.raio))
        if self.include_zero:
            numeros.add(0)
        else:
            numeros.discard(0)
        numeros.add(espelho)

        params['espelho'] = espelho
        return self.match(sorted(numeros), f"mirror:{ultimo}", **params)


def _setor_por_nome(nome: str) -> str:
    if nome.startswith('tiers'):
        return 'Tiers du Cylindre'
    if nome.startswith('orphel'):
        return 'Orphelins'
    return 'Voisins de Zero'


class SectorCondition(BaseCondition):
    """
    Setor dominante (Voisins, Tiers, Orphelins)

    Modo fixo: o setor configurado aparece pelo menos `frequenciaMinima`
    vezes nos últimos `janela` números.

    Modo automático (`auto`, `minRatio` ou setor vazio): escolhe o setor
    com mais acertos na janela; empate resolvido na ordem Voisins, Tiers,
    Orphelins.
    """

    tipo = ConditionType.SETOR_DOMINANTE

    def __init__(self, config=None, subtype=""):
        super().__init__(config, subtype)
        self.setor = self.get_str('setor', 'sector', default='')
        self.auto = (
            self.get_bool('auto', default=False)
            or self.get_config_value('minRatio') is not None
            or self.setor in ('', 'auto')
        )

        if self.auto:
            self.janela = self.get_int('janela', 'window', default=18, minimo=3)
            self.min_ratio = self.get_float('minRatio', default=0.0)
        else:
            self.janela = self.get_int('janela', 'window', default=6, minimo=1)
            self.frequencia_minima = self.get_int(
                'frequenciaMinima',
                default=math.ceil(self.janela / 2),
                minimo=1,
            )

    def evaluate(self, history: List[Token]) -> ConditionResult:
        if self.auto:
            return self._automatico(history)
        return self._fixo(history)

    def _fixo(self, history: List[Token]) -> ConditionResult:
        nome = _setor_por_nome(self.setor)
        params = {'setor': nome, 'janela': self.janela, 'frequenciaMinima': self.frequencia_minima}

        numeros = apenas_numeros(history)
        if len(numeros) < self.janela:
            return self.no_match(**params)

        acertos = sum(1 for n in numeros[-self.janela:] if get_setor(n) == nome)
        params['acertos'] = acertos
        if acertos < self.frequencia_minima:
            return self.no_match(**params)
        return self.match(SETORES[nome], f"sector:{nome}", **params)

    def _automatico(self, history: List[Token]) -> ConditionResult:
        params = {'auto': True, 'janela': self.janela, 'minRatio': self.min_ratio}

        recentes = apenas_numeros(history)[-self.janela:]
        if not recentes:
            return self.no_match(**params)

        contagem = Counter(get_setor(n) for n in recentes)
        melhor, melhor_acertos = None, -1
        for nome in SETORES:
            acertos = contagem[nome]
            if acertos > melhor_acertos:
                melhor, melhor_acertos = nome, acertos

        ratio = melhor_acertos / len(recentes)
        params.update({'setor': melhor, 'ratio': round(ratio, 4)})
        if ratio < self.min_ratio:
            return self.no_match(**params)
        return self.match(SETORES[melhor], f"sector:{melhor}", **params)
