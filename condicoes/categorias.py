"""
condicoes/categorias.py

Condições sobre categorias de giro (cor, paridade, eventos do builder):
repetição, ausência, tendência, alternância, quebra e janela de tempo
"""

from typing import Callable, Dict, List, Optional

from condicoes.base import (
    BaseCondition,
    ConditionResult,
    ConditionType,
    complemento_da_categoria,
    ler_numero,
    numeros_da_categoria,
)
from core.historico import (
    Token,
    categoria_cor,
    categoria_paridade,
    evento_do_numero,
    token_corresponde,
)


CLASSIFICADORES: Dict[str, Callable[[Token], Optional[str]]] = {
    'cor': categoria_cor,
    'paridade': categoria_paridade,
}


def _classificador(eixo: str) -> Callable[[Token], Optional[str]]:
    return CLASSIFICADORES.get(eixo, categoria_cor)


class RepetitionCondition(BaseCondition):
    """
    Repetição na ponta do histórico

    Dois modos:
    - `evento` + `ocorrencias`: os últimos N tokens casam com o evento
    - `eixo` (cor/paridade) + `minRun`: sequência da mesma categoria no
      final do histórico, o zero quebra a sequência
    """

    tipo = ConditionType.REPETITION

    def __init__(self, config=None, subtype=""):
        super().__init__(config, subtype)
        self.evento = self.get_str('evento', default='')
        self.eixo = self.get_str('eixo', default='cor')
        if self.evento:
            self.ocorrencias = self.get_int('ocorrencias', 'minRun', default=2, minimo=1)
        else:
            self.ocorrencias = self.get_int('minRun', 'ocorrencias', default=2, minimo=1)

    def evaluate(self, history: List[Token]) -> ConditionResult:
        if self.evento:
            return self._por_evento(history)
        return self._por_eixo(history)

    def _por_evento(self, history: List[Token]) -> ConditionResult:
        n = self.ocorrencias
        params = {'evento': self.evento, 'ocorrencias': n}
        if len(history) < n:
            return self.no_match(**params)
        if not all(token_corresponde(t, self.evento) for t in history[-n:]):
            return self.no_match(**params)
        return self.match(numeros_da_categoria(self.evento), f"repetition:{self.evento}", **params)

    def _por_eixo(self, history: List[Token]) -> ConditionResult:
        classificar = _classificador(self.eixo)
        categorias = [c for c in (classificar(t) for t in history) if c is not None]
        params = {'eixo': self.eixo, 'minRun': self.ocorrencias}

        if not categorias or categorias[-1] == 'zero':
            return self.no_match(**params)

        atual = categorias[-1]
        run = 0
        for categoria in reversed(categorias):
            if categoria != atual:
                break
            run += 1

        params['run'] = run
        if run < self.ocorrencias:
            return self.no_match(**params)
        return self.match(numeros_da_categoria(atual), f"repetition:{atual}", **params)


class AbsenceCondition(BaseCondition):
    """
    Ausência de um evento (ou de um número) nas últimas rodadas

    Contribui a categoria complementar: vermelho ausente -> pretos,
    zero ausente -> 1-36. Com `numeroAlvo` contribui o próprio número.
    """

    tipo = ConditionType.ABSENCE

    def __init__(self, config=None, subtype=""):
        super().__init__(config, subtype)
        self.alvo = self.get_str('alvo', 'evento', default='vermelho')
        self.rodadas = self.get_int('spins', 'rodadasSemOcorrer', default=3, minimo=1)
        self.numero_raw = self.get_config_value('numeroAlvo', 'numero')
        self.modo_numero = self.alvo == 'numero' or self.get_config_value('numeroAlvo') is not None

    def evaluate(self, history: List[Token]) -> ConditionResult:
        n = self.rodadas
        params = {'alvo': self.alvo, 'spins': n}
        if len(history) < n:
            return self.no_match(**params)
        janela = history[-n:]

        if self.modo_numero:
            numero = ler_numero(self.numero_raw)
            if numero is None:
                return self.no_match(**params)
            params['numero'] = numero
            evento = evento_do_numero(numero)
            if any(token_corresponde(t, evento) for t in janela):
                return self.no_match(**params)
            return self.match([numero], f"absence:numero:{numero}", **params)

        if any(token_corresponde(t, self.alvo) for t in janela):
            return self.no_match(**params)
        return self.match(complemento_da_categoria(self.alvo), f"absence:{self.alvo}", **params)


class TrendCondition(BaseCondition):
    """Frequência de um evento na janela recente (0-1)"""

    tipo = ConditionType.TREND

    def __init__(self, config=None, subtype=""):
        super().__init__(config, subtype)
        self.evento = self.get_str('evento', default='vermelho')
        self.janela = self.get_int('janela', 'window', default=10, minimo=1)
        self.frequencia_minima = self.get_float('frequenciaMinima', default=0.6)

    def evaluate(self, history: List[Token]) -> ConditionResult:
        recorte = history[-self.janela:]
        params = {
            'evento': self.evento,
            'janela': self.janela,
            'frequenciaMinima': self.frequencia_minima,
        }
        if not recorte:
            return self.no_match(**params)

        acertos = sum(1 for t in recorte if token_corresponde(t, self.evento))
        ratio = acertos / len(recorte)
        params['ratio'] = round(ratio, 4)
        if ratio < self.frequencia_minima:
            return self.no_match(**params)
        return self.match(numeros_da_categoria(self.evento), f"trend:{self.evento}", **params)


class AlternationCondition(BaseCondition):
    """
    Alternância estrita de cor ou paridade nos últimos N giros

    Ex: vermelho, preto, vermelho, preto -> próxima categoria: vermelho
    """

    tipo = ConditionType.ALTERNATION

    def __init__(self, config=None, subtype=""):
        super().__init__(config, subtype)
        self.eixo = self.get_str('eixo', default='cor')
        self.comprimento = self.get_int('comprimento', 'length', default=4, minimo=2)

    def evaluate(self, history: List[Token]) -> ConditionResult:
        n = self.comprimento
        params = {'eixo': self.eixo, 'comprimento': n}
        if len(history) < n:
            return self.no_match(**params)

        classificar = _classificador(self.eixo)
        categorias = [classificar(t) for t in history[-n:]]
        if any(c is None or c == 'zero' for c in categorias):
            return self.no_match(**params)

        for anterior, atual in zip(categorias, categorias[1:]):
            if anterior == atual:
                return self.no_match(**params)

        proxima = complemento_da_categoria(categorias[-1])
        return self.match(proxima, f"alternation:{self.eixo}", **params)


class BreakCondition(BaseCondition):
    """Sequência de um evento no final do histórico (apenas filtro, sem números)"""

    tipo = ConditionType.BREAK

    def __init__(self, config=None, subtype=""):
        super().__init__(config, subtype)
        self.evento = self.get_str('evento', default='vermelho')
        self.minimo = self.get_int('minimo', 'ocorrencias', default=3, minimo=1)

    def evaluate(self, history: List[Token]) -> ConditionResult:
        run = 0
        for token in reversed(history):
            if not token_corresponde(token, self.evento):
                break
            run += 1

        params = {'evento': self.evento, 'minimo': self.minimo, 'run': run}
        if run < self.minimo:
            return self.no_match(**params)
        return self.match([], f"break:{self.evento}", **params)


class TimeWindowCondition(BaseCondition):
    """Tamanho do histórico dentro de [inicio, fim] (apenas filtro)"""

    tipo = ConditionType.TIME_WINDOW

    def __init__(self, config=None, subtype=""):
        super().__init__(config, subtype)
        self.inicio = self.get_int('inicio', default=0)
        self.fim = self.get_int('fim', default=10_000)

    def evaluate(self, history: List[Token]) -> ConditionResult:
        params = {'inicio': self.inicio, 'fim': self.fim, 'tamanho': len(history)}
        if not self.inicio <= len(history) <= self.fim:
            return self.no_match(**params)
        return self.match([], "time-window", **params)
