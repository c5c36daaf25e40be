"""
tests/conftest.py

Fixtures compartilhadas: grafos de exemplo no formato do builder
"""

import os
import sys

import pytest

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)


def montar_payload(nodes, connections, **metadados):
    return {'nodes': nodes, 'connections': connections, **metadados}


@pytest.fixture
def payload_vizinhos():
    """neighbors(numero=17, raio=2) -> AND -> sinal"""
    return montar_payload(
        nodes=[
            {'id': 'c1', 'type': 'condition', 'subtype': 'neighbors', 'config': {'numero': 17, 'raio': 2}},
            {'id': 'l1', 'type': 'logic', 'config': {'operador': 'AND'}},
            {'id': 's1', 'type': 'signal', 'config': {'numeros': []}},
        ],
        connections=[
            {'id': 'e1', 'source': 'c1', 'target': 'l1', 'type': 'condition'},
            {'id': 'e2', 'source': 'l1', 'target': 's1', 'type': 'success'},
        ],
        name='Vizinhos do 17',
    )


@pytest.fixture
def payload_repeticao_ou_ausencia():
    """repetition(cor, minRun=2) OR absence(vermelho, spins=3) -> sinal"""
    return montar_payload(
        nodes=[
            {'id': 'rep', 'type': 'condition', 'subtype': 'repetition', 'config': {'eixo': 'cor', 'minRun': 2}},
            {'id': 'aus', 'type': 'condition', 'subtype': 'absence', 'config': {'alvo': 'vermelho', 'spins': 3}},
            {'id': 'ou', 'type': 'logic', 'config': {'operador': 'OR'}},
            {'id': 'sinal', 'type': 'signal', 'config': {}},
        ],
        connections=[
            {'source': 'rep', 'target': 'ou', 'type': 'condition'},
            {'source': 'aus', 'target': 'ou', 'type': 'condition'},
            {'source': 'ou', 'target': 'sinal', 'type': 'success'},
        ],
        name='Repetição ou Ausência',
    )
