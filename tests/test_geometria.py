"""
tests/test_geometria.py

Testa a geometria da roda (distância, espelho, vizinhos) e os auxiliares
"""

import math

import pytest

from utils.constants import RODA, VOISINS, TIERS, ORPHELINS, get_setor, get_duzia, get_coluna
from utils.helpers import (
    clamp_float,
    clamp_int,
    distancia_circular,
    espelho_roda,
    get_familia_terminal,
    get_vizinhos_raio,
    numeros_validos,
    slugify,
)


class TestDistanciaCircular:
    def test_identidade(self):
        for n in RODA:
            assert distancia_circular(n, n) == 0

    def test_simetria(self):
        for a in RODA:
            for b in RODA:
                assert distancia_circular(a, b) == distancia_circular(b, a)

    def test_vizinhos_diretos(self):
        assert distancia_circular(0, 32) == 1
        assert distancia_circular(0, 26) == 1
        assert distancia_circular(0, 15) == 2

    def test_maximo_18(self):
        assert max(distancia_circular(0, n) for n in RODA) == 18

    def test_fora_da_roda(self):
        assert distancia_circular(0, 37) == math.inf
        assert distancia_circular(-1, 5) == math.inf


class TestEspelho:
    def test_formula_18_casas(self):
        assert espelho_roda(0) == 10
        assert espelho_roda(5) == 0
        assert espelho_roda(17) == 31

    def test_espelho_duplo_fica_perto(self):
        # 37 casas: aplicar duas vezes não volta exatamente ao número
        for n in RODA:
            assert distancia_circular(espelho_roda(espelho_roda(n)), n) <= 1

    def test_fora_da_roda(self):
        assert espelho_roda(40) is None


class TestVizinhos:
    def test_raio_zero(self):
        assert get_vizinhos_raio(17, 0) == [17]

    def test_raio_dois(self):
        assert get_vizinhos_raio(17, 2) == [2, 6, 17, 25, 34]

    def test_raio_maximo_cobre_a_roda(self):
        assert get_vizinhos_raio(0, 18) == list(range(37))

    def test_familia_terminal(self):
        assert get_familia_terminal(3) == [3, 13, 23, 33]
        assert get_familia_terminal(0) == [0, 10, 20, 30]
        assert get_familia_terminal(9) == [9, 19, 29]


class TestSetoresEGrupos:
    def test_setores_particionam_a_roda(self):
        assert sorted(VOISINS + TIERS + ORPHELINS) == list(range(37))

    def test_get_setor(self):
        assert get_setor(0) == 'Voisins de Zero'
        assert get_setor(5) == 'Tiers du Cylindre'
        assert get_setor(1) == 'Orphelins'

    def test_duzia_e_coluna(self):
        assert get_duzia(0) == 0
        assert get_duzia(13) == 2
        assert get_coluna(3) == 3
        assert get_coluna(34) == 1


class TestAuxiliares:
    @pytest.mark.parametrize('valor,esperado', [
        (5, 5), (99, 18), (-3, 0), ('7', 7), ('abc', 2), (None, 2), (True, 2), (float('nan'), 2), (2.6, 3),
    ])
    def test_clamp_int(self, valor, esperado):
        assert clamp_int(valor, 0, 18, 2) == esperado

    def test_clamp_float(self):
        assert clamp_float(1.5, 0.0, 1.0, 0.6) == 1.0
        assert clamp_float('x', 0.0, 1.0, 0.6) == 0.6

    def test_numeros_validos(self):
        assert numeros_validos([3, 3, 40, -1, 'a', True, 2.0, 0]) == [0, 2, 3]

    def test_slugify(self):
        assert slugify('Espelhos SOFIA v2') == 'espelhos-sofia-v2'
        assert slugify('  --Atlas!!  ') == 'atlas'
