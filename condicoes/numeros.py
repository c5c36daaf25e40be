"""
condicoes/numeros.py

Condições sobre números específicos e listas de números:
número específico, repetição de número, sequência customizada,
recente em conjunto e adjacência em lista
"""

import logging
from typing import List, Optional

from condicoes.base import (
    BaseCondition,
    ConditionResult,
    ConditionType,
    ler_numero,
    numeros_da_categoria,
)
from core.historico import (
    Token,
    apenas_numeros,
    evento_do_numero,
    normalizar_token,
    token_corresponde,
)
from utils.helpers import numeros_validos

logger = logging.getLogger(__name__)


class SpecificNumberCondition(BaseCondition):
    """
    Número específico

    modo 'ocorreu': o número saiu em algum ponto do histórico
    modo 'ausente': o número não saiu nas últimas `rodadasSemOcorrer` rodadas
    """

    tipo = ConditionType.SPECIFIC_NUMBER

    def __init__(self, config=None, subtype=""):
        super().__init__(config, subtype)
        self.numero = ler_numero(self.get_config_value('numero', 'numeroAlvo'))
        self.modo = self.get_str('modo', 'mode', default='ocorreu')
        self.rodadas = self.get_int('rodadasSemOcorrer', 'spins', default=10, minimo=1)

    def evaluate(self, history: List[Token]) -> ConditionResult:
        params = {'numero': self.numero, 'modo': self.modo}
        if self.numero is None:
            return self.no_match(**params)

        evento = evento_do_numero(self.numero)
        if self.modo == 'ocorreu':
            if not any(token_corresponde(t, evento) for t in history):
                return self.no_match(**params)
            return self.match([self.numero], f"specific-number:{self.numero}", **params)

        if self.modo == 'ausente':
            params['rodadasSemOcorrer'] = self.rodadas
            if len(history) < self.rodadas:
                return self.no_match(**params)
            if any(token_corresponde(t, evento) for t in history[-self.rodadas:]):
                return self.no_match(**params)
            return self.match([self.numero], f"specific-number:ausente:{self.numero}", **params)

        logger.debug(f"Modo desconhecido em specific-number: {self.modo}")
        return self.no_match(**params)


class RepeatNumberCondition(BaseCondition):
    """O mesmo número nos últimos `ocorrencias` giros"""

    tipo = ConditionType.REPEAT_NUMBER

    def __init__(self, config=None, subtype=""):
        super().__init__(config, subtype)
        self.numero = ler_numero(self.get_config_value('numero', 'numeroAlvo'))
        self.ocorrencias = self.get_int('ocorrencias', default=2, minimo=1)

    def evaluate(self, history: List[Token]) -> ConditionResult:
        n = self.ocorrencias
        params = {'numero': self.numero, 'ocorrencias': n}
        if self.numero is None or len(history) < n:
            return self.no_match(**params)
        evento = evento_do_numero(self.numero)
        if not all(token_corresponde(t, evento) for t in history[-n:]):
            return self.no_match(**params)
        return self.match([self.numero], f"repeat-number:{self.numero}", **params)


def _elemento_corresponde(token: Token, elemento: Token) -> bool:
    if isinstance(elemento, int):
        return isinstance(token, int) and token == elemento
    return token_corresponde(token, elemento)


def _numeros_do_elemento(elemento: Token) -> List[int]:
    if isinstance(elemento, int):
        return [elemento]
    return numeros_da_categoria(elemento)


class SequenceCustomCondition(BaseCondition):
    """
    Sequência definida pelo usuário

    Elementos podem ser números, cores, paridade ou literais.
    modo 'exato': a sequência casa com o final do histórico
    modo 'parcial': a sequência casa em qualquer ponto das últimas N+10 rodadas
    Em ambos são toleradas até `tolerancia` divergências.

    Contribui o elemento seguinte da sequência (volta ao início).
    """

    tipo = ConditionType.SEQUENCE_CUSTOM

    def __init__(self, config=None, subtype=""):
        super().__init__(config, subtype)
        bruta = self.get_list('sequencia', 'sequence')
        self.sequencia = [t for t in (normalizar_token(v) for v in bruta) if t is not None]
        self.modo = self.get_str('modo', 'mode', default='exato')
        self.tolerancia = self.get_int(
            'tolerancia', default=0, minimo=0, maximo=max(len(self.sequencia), 0)
        )

    def _divergencias(self, trecho: List[Token]) -> int:
        return sum(1 for t, e in zip(trecho, self.sequencia) if not _elemento_corresponde(t, e))

    def _casa(self, history: List[Token]) -> Optional[int]:
        """Posição final do trecho que casou, ou None"""
        n = len(self.sequencia)
        if len(history) < n:
            return None

        if self.modo == 'parcial':
            recorte = history[-(n + 10):]
            inicio_recorte = len(history) - len(recorte)
            for inicio in range(len(recorte) - n, -1, -1):
                if self._divergencias(recorte[inicio:inicio + n]) <= self.tolerancia:
                    return inicio_recorte + inicio + n - 1
            return None

        if self._divergencias(history[-n:]) <= self.tolerancia:
            return len(history) - 1
        return None

    def evaluate(self, history: List[Token]) -> ConditionResult:
        params = {
            'sequencia': list(self.sequencia),
            'modo': self.modo,
            'tolerancia': self.tolerancia,
        }
        if not self.sequencia:
            return self.no_match(**params)

        posicao = self._casa(history)
        if posicao is None:
            return self.no_match(**params)

        proximo = self.sequencia[0]
        params.update({'posicao': posicao, 'proximo': proximo})
        return self.match(_numeros_do_elemento(proximo), "sequence_custom", **params)


class RecentInSetCondition(BaseCondition):
    """Algum dos últimos `janela` números pertence ao conjunto `set`"""

    tipo = ConditionType.RECENT_IN_SET

    def __init__(self, config=None, subtype=""):
        super().__init__(config, subtype)
        self.janela = self.get_int('janela', 'window', default=5, minimo=1)
        self.conjunto = numeros_validos(self.get_list('set', 'numeros'))
        self.saida = numeros_validos(self.get_list('outputNumbers'))

    def evaluate(self, history: List[Token]) -> ConditionResult:
        params = {'janela': self.janela, 'set': self.conjunto}
        recentes = apenas_numeros(history[-self.janela:])
        encontrados = [n for n in recentes if n in self.conjunto]
        if not encontrados:
            return self.no_match(**params)

        params['encontrados'] = numeros_validos(encontrados)
        return self.match(self.saida or encontrados, "recent-in-set", **params)


class AdjacentInListCondition(BaseCondition):
    """
    Dois giros consecutivos ocupam posições vizinhas em `list`

    Com `circular` o primeiro e o último elementos da lista também são vizinhos.
    """

    tipo = ConditionType.ADJACENT_IN_LIST

    def __init__(self, config=None, subtype=""):
        super().__init__(config, subtype)
        self.janela = self.get_int('janela', 'window', default=6, minimo=2)
        self.circular = self.get_bool('circular', default=False)
        self.saida = numeros_validos(self.get_list('outputNumbers'))

        lista = []
        for valor in self.get_list('list', 'lista'):
            numero = ler_numero(valor)
            if numero is not None and numero not in lista:
                lista.append(numero)
        self.lista = lista

    def _adjacentes(self, a: int, b: int) -> bool:
        if a not in self.lista or b not in self.lista:
            return False
        diff = abs(self.lista.index(a) - self.lista.index(b))
        if diff == 1:
            return True
        return self.circular and len(self.lista) > 2 and diff == len(self.lista) - 1

    def evaluate(self, history: List[Token]) -> ConditionResult:
        params = {'janela': self.janela, 'circular': self.circular}
        recentes = apenas_numeros(history[-self.janela:])

        # do par mais recente para o mais antigo
        for i in range(len(recentes) - 1, 0, -1):
            a, b = recentes[i - 1], recentes[i]
            if self._adjacentes(a, b):
                params['par'] = [a, b]
                return self.match(self.saida or [a, b], "adjacent-in-list", **params)

        return self.no_match(**params)
