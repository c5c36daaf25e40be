"""
tests/test_compilador.py

Testa a compilação, a avaliação ponta a ponta e o artefato exportado
"""

import json

import pytest

from core.avaliador import avaliar_estrategia
from core.compilador import (
    ArtifactError,
    carregar_artefato,
    compilar_estrategia,
    exportar_artefato,
    nome_arquivo_artefato,
)
from core.grafo import GraphValidationError, carregar_grafo
from utils.constants import VERMELHOS
from utils.helpers import distancia_circular


class TestPontaAPonta:
    def test_vizinhos_do_17(self, payload_vizinhos):
        estrategia = compilar_estrategia(payload_vizinhos)

        check = estrategia.checkStrategy([5, 23, 10, 17])
        assert check['shouldActivate'] is True
        assert check['confidence'] == 0.8
        assert check['reason'] == 'Lógica satisfeita'

        sinal = estrategia.generateSignal([5, 23, 10, 17])
        assert sinal['numbers'] == [2, 6, 17, 25, 34]
        assert any(distancia_circular(n, 17) == 1 for n in sinal['numbers'])
        assert sinal['metadata']['selectionMode'] == 'automatic'

    def test_repeticao_ou_ausencia(self, payload_repeticao_ou_ausencia):
        estrategia = compilar_estrategia(payload_repeticao_ou_ausencia)
        check = estrategia.check_strategy([1, 3, 18])
        assert check['shouldActivate'] is True

        telemetria = check['telemetry']
        por_no = {r['nodeId']: r['passed'] for r in telemetria['conditionResults']}
        assert por_no == {'rep': True, 'aus': False}
        assert telemetria['derivedBy'][0]['nodeId'] == 'rep'
        assert estrategia.generate_signal([1, 3, 18])['numbers'] == VERMELHOS

    def test_inativo(self, payload_vizinhos):
        estrategia = compilar_estrategia(payload_vizinhos)
        check = estrategia.check_strategy([0, 0, 0])
        assert check['shouldActivate'] is False
        assert check['confidence'] == 0.1
        assert estrategia.generate_signal([0, 0, 0])['numbers'] == []

    def test_compilada_igual_a_avaliacao_ao_vivo(self, payload_vizinhos):
        historico = [5, 23, 10, 17]
        ao_vivo = avaliar_estrategia(carregar_grafo(payload_vizinhos), historico).signal_result()
        compilada = compilar_estrategia(payload_vizinhos).generate_signal(historico)
        assert ao_vivo == compilada

    def test_idempotente(self, payload_repeticao_ou_ausencia):
        estrategia = compilar_estrategia(payload_repeticao_ou_ausencia)
        assert estrategia.generate_signal([1, 3, 18]) == estrategia.generate_signal([1, 3, 18])

    def test_contexto_sobrescreve_modo(self, payload_vizinhos):
        payload_vizinhos['nodes'][2]['config']['numeros'] = [1, 2, 3]
        estrategia = compilar_estrategia(payload_vizinhos)
        sinal = estrategia.generate_signal([5, 23, 10, 17], {'selectionMode': 'manual'})
        assert sinal['numbers'] == [1, 2, 3]
        assert sinal['metadata']['selectionMode'] == 'manual'

    def test_telemetria(self, payload_vizinhos):
        telemetria = compilar_estrategia(payload_vizinhos).check_strategy([5, 23, 10, 17])['telemetry']
        assert telemetria['selectionModeEvaluated'] == 'automatic'
        assert telemetria['signalActive'] is True
        assert telemetria['derivedCount'] == 5
        assert telemetria['inputs']['lastNumber'] == 17
        assert telemetria['graphWiring']['signalInputs'] == ['l1']
        assert telemetria['logicTrace'][-1]['type'] == 'signal'
        assert telemetria['decisionTrace']['gating']['gated'] is False


class TestMetadados:
    def test_padroes(self):
        metadata = compilar_estrategia({'nodes': []}).METADATA
        assert metadata['name'] == 'Estrategia_Sem_Nome'
        assert metadata['author'] == 'SOFIA Builder'
        assert metadata['category'] == 'dynamic'
        assert metadata['selectionMode'] == 'automatic'
        assert metadata['gating']['maxNumbersAuto'] == 18

    def test_metadata_e_copia(self, payload_vizinhos):
        estrategia = compilar_estrategia(payload_vizinhos)
        estrategia.METADATA['name'] = 'alterado'
        assert estrategia.name == 'Vizinhos do 17'


class TestIsolamento:
    def test_resultado_nao_compartilha_estado(self, payload_vizinhos):
        resultado = compilar_estrategia(payload_vizinhos).avaliar([0, 0, 0])
        antes = resultado.to_dict()

        sinal = resultado.signal_result()
        sinal['metadata']['gatingApplied']['reasons'].append('forjado')
        sinal['metadata']['telemetry']['conditionResults'][0]['numbers'].append(99)
        check = resultado.check_result()
        check['telemetry']['inputs']['lastNumber'] = 36
        resultado.gating_applied['reasons'].clear()

        assert resultado.to_dict() == antes
        assert 'forjado' not in resultado.check_result()['telemetry']['gatingApplied']['reasons']

    def test_grafo_exposto_e_copia(self, payload_vizinhos):
        estrategia = compilar_estrategia(payload_vizinhos)
        esperado = estrategia.generate_signal([5, 23, 10, 17])

        estrategia.graph.nodes[0].config['raio'] = 3
        estrategia.graph.connections.clear()

        assert estrategia.generate_signal([5, 23, 10, 17]) == esperado
        assert estrategia.graph.nodes[0].config['raio'] == 2

    def test_payload_alterado_apos_compilar(self, payload_vizinhos):
        estrategia = compilar_estrategia(payload_vizinhos)
        esperado = estrategia.generate_signal([5, 23, 10, 17])

        payload_vizinhos['nodes'][0]['config']['raio'] = 3
        payload_vizinhos['nodes'][2]['config']['numeros'] = [1]

        assert estrategia.generate_signal([5, 23, 10, 17]) == esperado

    def test_schema_nao_suportado(self, payload_vizinhos):
        payload_vizinhos['schemaVersion'] = '2.0'
        with pytest.raises(GraphValidationError) as exc:
            compilar_estrategia(payload_vizinhos)
        assert 'schemaVersion' in exc.value.problemas[0]

    def test_nome_longo(self, payload_vizinhos):
        payload_vizinhos['name'] = 'x' * 129
        with pytest.raises(GraphValidationError):
            compilar_estrategia(payload_vizinhos)

    def test_slug_e_nome_de_arquivo(self, payload_vizinhos):
        estrategia = compilar_estrategia(payload_vizinhos)
        assert estrategia.slug == 'vizinhos-do-17'
        assert nome_arquivo_artefato(estrategia.name) == 'vizinhos-do-17.strategy.json'


class TestArtefato:
    def test_ida_e_volta(self, payload_vizinhos):
        estrategia = compilar_estrategia(payload_vizinhos)
        texto = exportar_artefato(estrategia)
        recarregada = carregar_artefato(texto)

        assert recarregada.METADATA == estrategia.METADATA
        assert exportar_artefato(recarregada) == texto
        assert recarregada.generate_signal([5, 23, 10, 17]) == estrategia.generate_signal([5, 23, 10, 17])

    def test_adulterado(self, payload_vizinhos):
        artefato = json.loads(exportar_artefato(compilar_estrategia(payload_vizinhos)))
        artefato['graph']['nodes'][0]['config']['raio'] = 18
        with pytest.raises(ArtifactError):
            carregar_artefato(json.dumps(artefato))

    def test_json_invalido(self):
        with pytest.raises(ArtifactError):
            carregar_artefato('{nao e json')

    def test_formato_desconhecido(self):
        with pytest.raises(ArtifactError):
            carregar_artefato(json.dumps({'format': 'outro'}))
