"""
tests/test_condicoes.py

Testa cada variante de condição isoladamente (histórico: mais recente por último)
"""

from condicoes import ConditionType, UnknownCondition, avaliar_condicao, criar_condicao, resolver_tipo
from condicoes.terminais import detectar_padroes
from utils.constants import (
    COLUNA_1,
    DUZIA_1,
    DUZIA_2,
    IMPARES,
    PARES,
    PRETOS,
    SEM_ZERO,
    TIERS,
    VERMELHOS,
    VOISINS,
)


class TestRepetition:
    def test_tres_vermelhos_seguidos(self):
        r = avaliar_condicao('repetition', {'eixo': 'cor', 'minRun': 3}, [1, 3, 5])
        assert r.passed
        assert r.numbers == VERMELHOS
        assert r.params['run'] == 3

    def test_sequencia_quebrada(self):
        r = avaliar_condicao('repetition', {'eixo': 'cor', 'minRun': 3}, [1, 3, 6])
        assert not r.passed
        assert r.numbers == []

    def test_zero_na_ponta_nao_conta(self):
        assert not avaliar_condicao('repetition', {'eixo': 'cor', 'minRun': 2}, [1, 3, 0]).passed

    def test_por_evento(self):
        r = avaliar_condicao('repetition', {'evento': 'preto', 'ocorrencias': 2}, [1, 2, 4])
        assert r.passed
        assert r.numbers == PRETOS

    def test_eixo_paridade(self):
        r = avaliar_condicao('repetition', {'eixo': 'paridade', 'minRun': 2}, [2, 4])
        assert r.passed
        assert r.numbers == PARES

    def test_historico_vazio(self):
        assert not avaliar_condicao('repetition', {}, []).passed


class TestAbsence:
    def test_vermelho_ausente_contribui_pretos(self):
        r = avaliar_condicao('absence', {'alvo': 'vermelho', 'spins': 5}, [2, 20, 26, 35, 22])
        assert r.passed
        assert set(r.numbers) <= set(PRETOS)

    def test_janela_incompleta(self):
        assert not avaliar_condicao('absence', {'alvo': 'vermelho', 'spins': 5}, [2, 4]).passed

    def test_evento_presente(self):
        assert not avaliar_condicao('absence', {'alvo': 'vermelho', 'spins': 3}, [2, 1, 4]).passed

    def test_zero_ausente(self):
        r = avaliar_condicao('absence', {'alvo': 'zero', 'spins': 3}, [1, 2, 3])
        assert r.numbers == SEM_ZERO

    def test_numero_alvo(self):
        assert avaliar_condicao('absence', {'numeroAlvo': 17, 'spins': 3}, [1, 2, 3]).numbers == [17]
        assert not avaliar_condicao('absence', {'numeroAlvo': '17', 'spins': 3}, [17, 2, 3]).passed

    def test_numero_alvo_zero_casa_com_literal(self):
        assert not avaliar_condicao('absence', {'numeroAlvo': 0, 'spins': 3}, ['zero', 1, 2]).passed
        assert not avaliar_condicao('absence', {'numeroAlvo': 0, 'spins': 3}, [0, 1, 2]).passed
        assert avaliar_condicao('absence', {'numeroAlvo': 0, 'spins': 3}, [1, 2, 3]).numbers == [0]


class TestTrend:
    def test_frequencia_atingida(self):
        r = avaliar_condicao('trend', {'evento': 'vermelho', 'janela': 4, 'frequenciaMinima': 0.75}, [1, 3, 5, 2])
        assert r.passed
        assert r.params['ratio'] == 0.75

    def test_frequencia_baixa(self):
        config = {'evento': 'vermelho', 'janela': 4, 'frequenciaMinima': 0.75}
        assert not avaliar_condicao('trend', config, [1, 2, 4, 6]).passed

    def test_sem_historico(self):
        assert not avaliar_condicao('trend', {}, []).passed

    def test_config_invalida_volta_ao_padrao(self):
        condicao = criar_condicao('trend', {'frequenciaMinima': 5, 'janela': 'abc'})
        assert condicao.frequencia_minima == 1.0
        assert condicao.janela == 10

    def test_alias_frequency(self):
        assert criar_condicao('frequency', {}).tipo == ConditionType.TREND


class TestNeighbors:
    def test_vizinhos_do_17(self):
        r = avaliar_condicao('neighbors', {'numero': 17, 'raio': 2}, [5, 23, 10, 17])
        assert r.passed
        assert r.numbers == [2, 6, 17, 25, 34]

    def test_referencia_pelo_ultimo_numero(self):
        r = avaliar_condicao('neighbors', {'raio': 1}, [5, 'vermelho', 0])
        assert r.passed
        assert r.params['referencia'] == 0

    def test_sem_numero_recente_perto(self):
        assert not avaliar_condicao('neighbors', {'numero': 17, 'raio': 1}, [0, 0]).passed

    def test_sem_referencia(self):
        assert not avaliar_condicao('neighbors', {}, []).passed

    def test_exclui_zero(self):
        r = avaliar_condicao('neighbors', {'numero': 0, 'raio': 1, 'includeZero': False}, [32])
        assert r.numbers == [26, 32]

    def test_raio_limitado(self):
        r = avaliar_condicao('neighbors', {'numero': 0, 'raio': 99}, [5])
        assert r.params['raio'] == 18
        assert r.numbers == list(range(37))


class TestMirror:
    def test_espelho_do_ultimo(self):
        r = avaliar_condicao('mirror', {}, [5, 17])
        assert r.passed
        assert r.numbers == [31]
        assert r.params['mirrorOf'] == 17

    def test_include_zero(self):
        assert avaliar_condicao('mirror', {'includeZero': True}, [17]).numbers == [0, 31]

    def test_com_raio(self):
        assert avaliar_condicao('mirror', {'raio': 1}, [17]).numbers == [9, 14, 31]

    def test_sem_numero(self):
        assert not avaliar_condicao('mirror', {}, ['vermelho']).passed

    def test_espelho_zero_sem_include_zero(self):
        r = avaliar_condicao('mirror', {}, [5])
        assert r.passed
        assert r.numbers == [0]


class TestSector:
    def test_setor_fixo(self):
        r = avaliar_condicao('setorDominante', {'setor': 'voisins', 'janela': 3}, [0, 32, 5])
        assert r.passed
        assert r.numbers == sorted(VOISINS)

    def test_setor_fixo_abaixo_do_minimo(self):
        assert not avaliar_condicao('setorDominante', {'setor': 'voisins', 'janela': 3}, [5, 10, 0]).passed

    def test_setor_fixo_janela_incompleta(self):
        assert not avaliar_condicao('setorDominante', {'setor': 'voisins', 'janela': 3}, [0, 32]).passed

    def test_automatico(self):
        r = avaliar_condicao('sector', {'auto': True, 'janela': 3}, [5, 10, 23])
        assert r.passed
        assert r.numbers == sorted(TIERS)
        assert r.params['ratio'] == 1.0

    def test_automatico_empate_prioriza_voisins(self):
        r = avaliar_condicao('setorDominante', {'auto': True, 'janela': 3}, [0, 5, 1])
        assert r.params['setor'] == 'Voisins de Zero'

    def test_automatico_min_ratio(self):
        config = {'janela': 3, 'minRatio': 0.5}
        assert not avaliar_condicao('setorDominante', config, [0, 5, 1]).passed


class TestGrupos:
    def test_duzia_quente(self):
        r = avaliar_condicao('dozen_hot', {'janela': 4, 'frequenciaMinima': 2}, [1, 2, 13, 25])
        assert r.passed
        assert r.numbers == DUZIA_1
        assert r.params['duzias'] == [1]

    def test_duas_duzias(self):
        r = avaliar_condicao('dozen_hot', {'janela': 4, 'frequenciaMinima': 2}, [1, 2, 13, 14])
        assert r.numbers == DUZIA_1 + DUZIA_2

    def test_janela_incompleta(self):
        assert not avaliar_condicao('dozen_hot', {'janela': 4, 'frequenciaMinima': 2}, [1, 2, 3]).passed

    def test_coluna_quente(self):
        r = avaliar_condicao('column_hot', {'janela': 3, 'frequenciaMinima': 3}, [1, 4, 7])
        assert r.numbers == COLUNA_1

    def test_zero_nao_pertence_a_grupo(self):
        assert not avaliar_condicao('dozen_hot', {'janela': 3, 'frequenciaMinima': 1}, [0, 0, 0]).passed
        assert not avaliar_condicao('column_hot', {'janela': 2, 'frequenciaMinima': 1}, [0, 'zero']).passed


class TestNumeroEspecifico:
    def test_ocorreu(self):
        assert avaliar_condicao('specific-number', {'numero': 7}, [7, 1, 2]).numbers == [7]
        assert not avaliar_condicao('specific-number', {'numero': 7}, [1, 2]).passed

    def test_ausente(self):
        config = {'numero': 7, 'modo': 'ausente', 'rodadasSemOcorrer': 3}
        assert avaliar_condicao('specific-number', config, [7, 1, 2, 3]).passed
        assert not avaliar_condicao('specific-number', config, [1, 7, 2]).passed
        assert not avaliar_condicao('specific-number', config, [1, 2]).passed

    def test_modo_desconhecido(self):
        assert not avaliar_condicao('specific-number', {'numero': 7, 'modo': 'xyz'}, [7]).passed

    def test_numero_invalido(self):
        assert not avaliar_condicao('specific-number', {'numero': 40}, [7]).passed

    def test_repeat_number(self):
        assert avaliar_condicao('repeat-number', {'numero': 7, 'ocorrencias': 2}, [1, 7, 7]).numbers == [7]
        assert not avaliar_condicao('repeat-number', {'numero': 7, 'ocorrencias': 2}, [7, 1, 7]).passed

    def test_zero_literal_conta_como_zero(self):
        assert avaliar_condicao('specific-number', {'numero': 0}, ['zero', 1]).numbers == [0]
        config = {'numero': 0, 'modo': 'ausente', 'rodadasSemOcorrer': 2}
        assert not avaliar_condicao('specific-number', config, [1, 'zero']).passed
        assert avaliar_condicao('repeat-number', {'numero': 0, 'ocorrencias': 2}, [0, 'zero']).passed


class TestAlternation:
    def test_alternancia_de_cor(self):
        r = avaliar_condicao('alternation', {'eixo': 'cor', 'comprimento': 4}, [1, 2, 3, 4])
        assert r.passed
        assert r.numbers == VERMELHOS

    def test_alternancia_de_paridade(self):
        r = avaliar_condicao('alternation', {'eixo': 'paridade', 'comprimento': 4}, [1, 2, 3, 4])
        assert r.numbers == IMPARES

    def test_zero_quebra(self):
        assert not avaliar_condicao('alternation', {'comprimento': 4}, [1, 2, 0, 4]).passed

    def test_sem_alternancia(self):
        assert not avaliar_condicao('alternation', {'comprimento': 4}, [1, 3, 2, 4]).passed


class TestSequenceCustom:
    def test_exato(self):
        r = avaliar_condicao('sequence_custom', {'sequencia': [7, 17, 27]}, [1, 7, 17, 27])
        assert r.passed
        assert r.numbers == [7]

    def test_exato_com_tolerancia(self):
        config = {'sequencia': [7, 17, 27]}
        assert not avaliar_condicao('sequence_custom', config, [1, 7, 17, 26]).passed
        config['tolerancia'] = 1
        assert avaliar_condicao('sequence_custom', config, [1, 7, 17, 26]).passed

    def test_parcial(self):
        config = {'sequencia': [7, 17, 27], 'modo': 'parcial'}
        r = avaliar_condicao('sequence_custom', config, [7, 17, 27, 1, 2])
        assert r.passed
        assert r.params['posicao'] == 2
        assert not avaliar_condicao('sequence_custom', {'sequencia': [7, 17, 27]}, [7, 17, 27, 1, 2]).passed

    def test_sequencia_de_cores(self):
        r = avaliar_condicao('sequence', {'sequence': ['vermelho', 'preto']}, [1, 2])
        assert r.numbers == VERMELHOS

    def test_sequencia_vazia(self):
        assert not avaliar_condicao('sequence_custom', {'sequencia': []}, [1, 2]).passed


class TestListas:
    def test_recent_in_set(self):
        r = avaliar_condicao('recent-in-set', {'set': [11, 22, 33]}, [1, 22, 3])
        assert r.numbers == [22]
        assert not avaliar_condicao('recent-in-set', {'set': [11, 22, 33]}, [1, 2]).passed

    def test_recent_in_set_output(self):
        config = {'set': [11, 22, 33], 'outputNumbers': [0, 5]}
        assert avaliar_condicao('recent-in-set', config, [22]).numbers == [0, 5]

    def test_adjacent_in_list(self):
        r = avaliar_condicao('adjacent-in-list', {'list': [21, 23, 25, 27]}, [23, 25])
        assert r.numbers == [23, 25]

    def test_adjacent_circular(self):
        config = {'list': [21, 23, 25, 27]}
        assert not avaliar_condicao('adjacent-in-list', config, [21, 27]).passed
        config['circular'] = True
        assert avaliar_condicao('adjacent-in-list', config, [21, 27]).passed


class TestTerminalPattern:
    def test_detectar_padroes(self):
        padroes = {(p.padrao, p.index) for p in detectar_padroes([1, 2, 1, 2])}
        assert ('alternate', 3) in padroes
        assert ('gap2', 2) in padroes
        assert not any(p == 'repeat' for p, _ in padroes)

    def test_repeticao_de_terminal(self):
        r = avaliar_condicao('terminal-pattern', {}, [3, 13])
        assert r.passed
        assert r.numbers == [3, 13, 23, 33]
        assert r.params['encontrado'] == 'repeat'

    def test_melhor_padrao_pela_forca(self):
        r = avaliar_condicao('terminal-pattern', {}, [1, 2, 11, 12])
        assert r.params['encontrado'] == 'alternate'
        assert r.numbers == [2, 12, 22, 32]

    def test_filtros(self):
        assert not avaliar_condicao('terminal-pattern', {'padrao': 'repeat'}, [1, 2, 11, 12]).passed
        assert not avaliar_condicao('terminal-pattern', {'minStrength': 3}, [3, 13]).passed
        assert not avaliar_condicao('terminal-pattern', {}, [1, 2]).passed

    def test_com_vizinhos(self):
        r = avaliar_condicao('terminal-pattern', {'includeNeighbors': True}, [3, 13])
        assert set([3, 13, 23, 33]) <= set(r.numbers)
        assert len(r.numbers) == 12


class TestFiltros:
    def test_break(self):
        r = avaliar_condicao('break', {'evento': 'vermelho', 'minimo': 2}, [2, 1, 3])
        assert r.passed
        assert r.numbers == []
        assert not avaliar_condicao('break', {'evento': 'vermelho', 'minimo': 2}, [1, 2]).passed

    def test_time_window(self):
        assert avaliar_condicao('time-window', {'inicio': 2, 'fim': 3}, [1, 2]).passed
        assert not avaliar_condicao('time-window', {'inicio': 2, 'fim': 3}, [1]).passed


class TestRegistro:
    def test_subtipo_desconhecido(self):
        condicao = criar_condicao('hotNumbers', {})
        assert isinstance(condicao, UnknownCondition)
        r = condicao.evaluate([1, 2, 3])
        assert not r.passed
        assert r.numbers == []

    def test_resolucao_sem_diferenciar_maiusculas(self):
        assert resolver_tipo('SetorDominante') == ConditionType.SETOR_DOMINANTE
        assert resolver_tipo('NEIGHBORS') == ConditionType.NEIGHBORS
        assert resolver_tipo(None) == ConditionType.UNKNOWN

    def test_numeros_sempre_validos(self):
        for subtipo in ('neighbors', 'mirror', 'terminal-pattern', 'recent-in-set'):
            r = avaliar_condicao(subtipo, {'set': [1, 40, 'x']}, [1, 11, 21])
            assert all(0 <= n <= 36 for n in r.numbers)
            assert r.numbers == sorted(set(r.numbers))
