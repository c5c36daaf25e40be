"""
config/templates.py

Catálogo oficial de estratégias (templates do builder)

Cada template é um grafo completo, pronto para compilar.
Só usa subtipos de condição implementados pelo motor.
"""

import copy
from typing import Any, Dict, List, Optional

from utils.constants import RODA


def _trigger(janela: int) -> Dict[str, Any]:
    return {'id': 'trigger_1', 'type': 'trigger', 'data': {'label': 'Analisar Janela', 'config': {'janela': janela}}}


def _condicao(node_id: str, subtype: str, label: str, config: Dict[str, Any]) -> Dict[str, Any]:
    return {
        'id': node_id,
        'type': 'condition',
        'subtype': subtype,
        'data': {'label': label, 'conditionType': subtype, 'config': config},
    }


def _logica(node_id: str, operador: str, label: str) -> Dict[str, Any]:
    return {'id': node_id, 'type': 'logic', 'data': {'label': label, 'config': {'operador': operador}}}


def _sinal(node_id: str, label: str, mensagem: str) -> Dict[str, Any]:
    return {
        'id': node_id,
        'type': 'signal',
        'data': {
            'label': label,
            'config': {'acao': 'emitir_sinal', 'mensagem': mensagem, 'prioridade': 'normal', 'numeros': []},
        },
    }


def _ligacoes(*pares) -> List[Dict[str, Any]]:
    """('a', 'b', 'success'), ... -> conexões e1, e2, ..."""
    return [
        {'id': f"e{idx}", 'source': origem, 'target': destino, 'type': kind}
        for idx, (origem, destino, kind) in enumerate(pares, start=1)
    ]


# =============================================================================
# TEMPLATES OFICIAIS
# =============================================================================

TEMPLATES_OFICIAIS: List[Dict[str, Any]] = [
    {
        'name': 'Conexão de Cores SOFIA',
        'slug': 'sofia-conexao-cores-v1',
        'description': 'Estratégia baseada em tendência de cor em janela recente.',
        'category': 'colors_trend',
        'tags': ['cores', 'tendência', 'builder'],
        'selectionMode': 'automatic',
        'nodes': [
            _trigger(30),
            _condicao('cond_trend_red', 'trend', 'Tendência Vermelho',
                      {'evento': 'vermelho', 'janela': 10, 'frequenciaMinima': 0.7}),
            _condicao('cond_trend_black', 'trend', 'Tendência Preto',
                      {'evento': 'preto', 'janela': 10, 'frequenciaMinima': 0.7}),
            _logica('logic_or', 'OR', 'Cor Quente (OR)'),
            _sinal('signal_cores', 'Gerar Sinal Conexão de Cores', 'Tendência de cor detectada na janela recente.'),
        ],
        'connections': _ligacoes(
            ('trigger_1', 'cond_trend_red', 'success'),
            ('trigger_1', 'cond_trend_black', 'success'),
            ('cond_trend_red', 'logic_or', 'condition'),
            ('cond_trend_black', 'logic_or', 'condition'),
            ('logic_or', 'signal_cores', 'success'),
        ),
    },
    {
        'name': 'Dúzias Estatísticas SOFIA',
        'slug': 'sofia-duzias-estatisticas-v1',
        'description': 'Aposta na dúzia mais quente em uma janela recente de spins.',
        'category': 'dozens_hot',
        'tags': ['duzias', 'estatistica', 'builder'],
        'selectionMode': 'automatic',
        'nodes': [
            _trigger(100),
            _condicao('cond_dozen_hot', 'dozen_hot', 'Dúzia Quente', {'janela': 100, 'frequenciaMinima': 8}),
            _sinal('signal_duzias', 'Gerar Sinal Dúzias Estatísticas', 'Dúzia quente detectada na janela recente.'),
        ],
        'connections': _ligacoes(
            ('trigger_1', 'cond_dozen_hot', 'success'),
            ('cond_dozen_hot', 'signal_duzias', 'success'),
        ),
    },
    {
        'name': 'Espelhos e Irmãos SOFIA',
        'slug': 'sofia-espelhos-irmaos-v1',
        'description': 'Explora padrões de espelhos e irmãos na roleta.',
        'category': 'mirrors_siblings',
        'tags': ['espelhos', 'irmaos', 'vizinhos', 'builder'],
        'selectionMode': 'automatic',
        'nodes': [
            _trigger(20),
            _condicao('cond_mirror', 'mirror', 'Presença de Espelho', {'raio': 1, 'includeZero': False}),
            _condicao('cond_neighbors', 'neighbors', 'Vizinhos do Último Número',
                      {'numero': 0, 'raio': 2, 'includeZero': True}),
            _logica('logic_and', 'AND', 'Espelhos + Vizinhos'),
            _sinal('signal_espelhos', 'Sinal Espelhos e Irmãos', 'Contexto de espelhos e vizinhos detectado.'),
        ],
        'connections': _ligacoes(
            ('trigger_1', 'cond_mirror', 'success'),
            ('trigger_1', 'cond_neighbors', 'success'),
            ('cond_mirror', 'logic_and', 'condition'),
            ('cond_neighbors', 'logic_and', 'condition'),
            ('logic_and', 'signal_espelhos', 'success'),
        ),
    },
    {
        'name': 'Atlas SOFIA',
        'slug': 'sofia-atlas-v1',
        'description': 'Ativa quando algum número do conjunto Atlas aparece na janela recente.',
        'category': 'atlas',
        'tags': ['atlas', 'conjuntos', 'builder'],
        'selectionMode': 'automatic',
        'nodes': [
            _trigger(10),
            _condicao('cond_atlas_recent', 'recent-in-set', 'Atlas - Recente no Conjunto', {
                'janela': 5,
                'set': [13, 14, 15, 16, 17, 18, 31, 32, 33, 34, 35, 36],
                'outputNumbers': [13, 14, 15, 16, 17, 18, 31, 32, 33, 34, 35, 36],
            }),
            _sinal('signal_atlas', 'Gerar Sinal Atlas', 'Conjunto Atlas detectado na janela recente.'),
        ],
        'connections': _ligacoes(
            ('trigger_1', 'cond_atlas_recent', 'success'),
            ('cond_atlas_recent', 'signal_atlas', 'success'),
        ),
    },
    {
        'name': 'Trovão SOFIA',
        'slug': 'sofia-trovao-v1',
        'description': 'Ativa quando aparecem triggers adjacentes em sequência.',
        'category': 'trovao',
        'tags': ['trovao', 'sequencia', 'builder'],
        'selectionMode': 'automatic',
        'nodes': [
            _trigger(10),
            _condicao('cond_trovao_adjacent', 'adjacent-in-list', 'Trovão - Triggers Adjacentes', {
                'janela': 6,
                'list': [21, 23, 25, 27],
                'circular': False,
                'outputNumbers': [1, 3, 5, 7, 9, 12, 14, 16, 18, 19, 21, 23, 25, 27, 30, 32, 34, 36],
            }),
            _sinal('signal_trovao', 'Gerar Sinal Trovão', 'Sequência de triggers do Trovão detectada.'),
        ],
        'connections': _ligacoes(
            ('trigger_1', 'cond_trovao_adjacent', 'success'),
            ('cond_trovao_adjacent', 'signal_trovao', 'success'),
        ),
    },
    {
        'name': 'Irmãos SOFIA',
        'slug': 'sofia-irmaos-v1',
        'description': 'Ativa quando um número irmão (11, 22, 33) aparece recentemente.',
        'category': 'irmaos',
        'tags': ['irmaos', 'vizinhos', 'builder'],
        'selectionMode': 'automatic',
        'nodes': [
            _trigger(10),
            _condicao('cond_irmaos_recent', 'recent-in-set', 'Irmãos - Recente no Conjunto', {
                'janela': 6,
                'set': [11, 22, 33],
                'outputNumbers': [0, 5, 7, 8, 9, 10, 11, 16, 18, 22, 23, 24, 28, 29, 30, 33],
            }),
            _sinal('signal_irmaos', 'Gerar Sinal Irmãos',
                   'Número irmão detectado recentemente; sugerindo irmãos e vizinhos (inclui 0).'),
        ],
        'connections': _ligacoes(
            ('trigger_1', 'cond_irmaos_recent', 'condition'),
            ('cond_irmaos_recent', 'signal_irmaos', 'condition'),
        ),
    },
    {
        'name': 'Espelhos SOFIA',
        'slug': 'sofia-espelhos-v1',
        'description': 'Deriva o número espelho do último giro e sugere o espelho com vizinhos.',
        'category': 'mirrors',
        'tags': ['espelhos', 'espelho', 'builder'],
        'selectionMode': 'automatic',
        'nodes': [
            _trigger(10),
            _condicao('cond_mirror', 'mirror', 'Espelho do Último Número', {'raio': 1, 'includeZero': True}),
            _sinal('signal_espelhos', 'Sinal Espelhos SOFIA', 'Espelho do último número derivado (com vizinhos).'),
        ],
        'connections': _ligacoes(
            ('trigger_1', 'cond_mirror', 'success'),
            ('cond_mirror', 'signal_espelhos', 'success'),
        ),
    },
    {
        'name': 'Padrões Alternados SOFIA',
        'slug': 'sofia-padroes-alternados-v1',
        'description': 'Deriva uma previsão por alternância (cor/paridade) com base no último giro.',
        'category': 'alternation_patterns',
        'tags': ['alternados', 'alternancia', 'builder'],
        'selectionMode': 'automatic',
        'nodes': [
            _trigger(10),
            _condicao('cond_alt_color', 'alternation', 'Alternância por Cor', {'eixo': 'cor'}),
            _condicao('cond_alt_parity', 'alternation', 'Alternância por Paridade', {'eixo': 'paridade'}),
            _logica('logic_or', 'OR', 'Alternância Ativa (OR)'),
            _sinal('signal_alternados', 'Sinal Padrões Alternados',
                   'Alternância detectada e conjunto derivado para o próximo giro.'),
        ],
        'connections': _ligacoes(
            ('trigger_1', 'cond_alt_color', 'success'),
            ('trigger_1', 'cond_alt_parity', 'success'),
            ('cond_alt_color', 'logic_or', 'condition'),
            ('cond_alt_parity', 'logic_or', 'condition'),
            ('logic_or', 'signal_alternados', 'success'),
        ),
    },
    {
        'name': 'Padrões de Duplas SOFIA',
        'slug': 'sofia-padroes-duplas-v1',
        'description': 'Ativa quando há repetição recente (dupla) e sugere o conjunto derivado.',
        'category': 'double_patterns',
        'tags': ['duplas', 'repeticao', 'builder'],
        'selectionMode': 'automatic',
        'nodes': [
            _trigger(12),
            _condicao('cond_double', 'repetition', 'Dupla por Repetição', {'eixo': 'cor', 'minRun': 2}),
            _sinal('signal_duplas', 'Sinal Padrões de Duplas', 'Dupla detectada por repetição recente.'),
        ],
        'connections': _ligacoes(
            ('trigger_1', 'cond_double', 'success'),
            ('cond_double', 'signal_duplas', 'success'),
        ),
    },
    {
        'name': 'Reflexão de Números SOFIA',
        'slug': 'sofia-reflexao-numeros-v1',
        'description': 'Deriva o espelho do último número e seus vizinhos por raio.',
        'category': 'mirror_numbers',
        'tags': ['reflexao', 'espelho', 'builder'],
        'selectionMode': 'automatic',
        'nodes': [
            _trigger(10),
            _condicao('cond_mirror', 'mirror', 'Espelho do Último Número', {'raio': 1, 'includeZero': True}),
            _sinal('signal_reflexao', 'Sinal Reflexão de Números', 'Espelho do último número (com vizinhos) derivado.'),
        ],
        'connections': _ligacoes(
            ('trigger_1', 'cond_mirror', 'success'),
            ('cond_mirror', 'signal_reflexao', 'success'),
        ),
    },
    {
        'name': 'Puxador de Terminais SOFIA',
        'slug': 'sofia-puxador-terminais-v1',
        'description': 'Explora padrões de terminais (último dígito) em sequências recentes.',
        'category': 'terminals_pull',
        'tags': ['terminais', 'puxador', 'builder'],
        'selectionMode': 'automatic',
        'nodes': [
            _trigger(20),
            _condicao('cond_terminal_pattern', 'terminal-pattern', 'Padrão de Terminais', {
                'janela': 20, 'padrao': 'any', 'minStrength': 1,
                'includeNeighbors': True, 'neighborRadius': 2, 'includeZero': True,
            }),
            _sinal('signal_terminais', 'Sinal Puxador de Terminais', 'Padrão de terminais detectado em sequência recente.'),
        ],
        'connections': _ligacoes(
            ('trigger_1', 'cond_terminal_pattern', 'success'),
            ('cond_terminal_pattern', 'signal_terminais', 'success'),
        ),
    },
    {
        'name': 'Terminais Refinados SOFIA',
        'slug': 'sofia-terminais-refinados-v1',
        'description': 'Detecta padrões no último dígito (terminal) e sugere números do terminal com vizinhos.',
        'category': 'terminal-pattern',
        'tags': ['terminais', 'vizinhos', 'builder'],
        'selectionMode': 'automatic',
        'nodes': [
            _trigger(6),
            _condicao('cond_terminal_pattern', 'terminal-pattern', 'Padrão de Terminais', {
                'janela': 6, 'padrao': 'any', 'minStrength': 1,
                'includeNeighbors': True, 'neighborRadius': 2, 'includeZero': True,
            }),
            _sinal('signal_terminais_refinados', 'Gerar Sinal Terminais Refinados',
                   'Padrão de terminais detectado; sugerindo números do terminal e vizinhos (inclui 0).'),
        ],
        'connections': _ligacoes(
            ('trigger_1', 'cond_terminal_pattern', 'success'),
            ('cond_terminal_pattern', 'signal_terminais_refinados', 'success'),
        ),
    },
    {
        'name': 'Números Puxam SOFIA',
        'slug': 'sofia-numeros-puxam-v1',
        'description': 'Explora relações de puxada entre números.',
        'category': 'numbers_pull',
        'tags': ['numeros', 'puxam', 'sequencia', 'builder'],
        'selectionMode': 'automatic',
        'nodes': [
            _trigger(25),
            _condicao('cond_sequence', 'sequence_custom', 'Sequência de Puxada',
                      {'sequencia': [7, 17, 27], 'tolerancia': 1}),
            _condicao('cond_neighbors', 'neighbors', 'Vizinhos do Último Número',
                      {'numero': 0, 'raio': 2, 'includeZero': True}),
            _logica('logic_and', 'AND', 'Puxada Ativa'),
            _sinal('signal_puxam', 'Sinal Números Puxam', 'Padrão de puxada entre números detectado.'),
        ],
        'connections': _ligacoes(
            ('trigger_1', 'cond_sequence', 'success'),
            ('trigger_1', 'cond_neighbors', 'success'),
            ('cond_sequence', 'logic_and', 'condition'),
            ('cond_neighbors', 'logic_and', 'condition'),
            ('logic_and', 'signal_puxam', 'success'),
        ),
    },
    {
        'name': 'Ondas SOFIA',
        'slug': 'sofia-ondas-v1',
        'description': 'Captura ondas de padrão combinando tendência de cor com alternância.',
        'category': 'waves_pattern',
        'tags': ['ondas', 'tendência', 'alternância', 'builder'],
        'selectionMode': 'automatic',
        'nodes': [
            _trigger(30),
            _condicao('cond_trend_color', 'trend', 'Tendência de Cor',
                      {'evento': 'vermelho', 'janela': 10, 'frequenciaMinima': 0.7}),
            _condicao('cond_alternation', 'alternation', 'Alternância de Cor', {'eixo': 'cor', 'comprimento': 4}),
            _logica('logic_and', 'AND', 'Onda Ativa'),
            _sinal('signal_ondas', 'Sinal Ondas SOFIA', 'Onda de padrão (tendência + alternância) detectada.'),
        ],
        'connections': _ligacoes(
            ('trigger_1', 'cond_trend_color', 'success'),
            ('trigger_1', 'cond_alternation', 'success'),
            ('cond_trend_color', 'logic_and', 'condition'),
            ('cond_alternation', 'logic_and', 'condition'),
            ('logic_and', 'signal_ondas', 'success'),
        ),
    },
    {
        'name': 'Os Opostos SOFIA',
        'slug': 'sofia-os-opostos-v1',
        'description': 'Sugere o número oposto (espelho) ao último giro.',
        'category': 'opposites',
        'tags': ['opostos', 'espelho', 'builder'],
        'selectionMode': 'automatic',
        'nodes': [
            _trigger(10),
            _condicao('cond_oposto', 'mirror', 'Oposto do Último Número', {'raio': 0, 'includeZero': False}),
            _sinal('signal_opostos', 'Sinal Os Opostos', 'Oposto do último número derivado.'),
        ],
        'connections': _ligacoes(
            ('trigger_1', 'cond_oposto', 'success'),
            ('cond_oposto', 'signal_opostos', 'success'),
        ),
    },
    {
        'name': 'Cavalo/Linha SOFIA',
        'slug': 'sofia-cavalo-linha-v1',
        'description': 'Ativa quando dois giros consecutivos caem em casas vizinhas da roda.',
        'category': 'wheel_adjacent',
        'tags': ['cavalo', 'linha', 'roda', 'builder'],
        'selectionMode': 'automatic',
        'nodes': [
            _trigger(12),
            _condicao('cond_adj_wheel', 'adjacent-in-list', 'Adjacente na Roda (EU)',
                      {'janela': 12, 'list': list(RODA), 'circular': True, 'outputNumbers': []}),
            _sinal('signal_cavalo', 'Sinal Cavalo/Linha', 'Giros vizinhos na roda detectados.'),
        ],
        'connections': _ligacoes(
            ('trigger_1', 'cond_adj_wheel', 'success'),
            ('cond_adj_wheel', 'signal_cavalo', 'success'),
        ),
    },
    {
        'name': 'Sequência de Números SOFIA',
        'slug': 'sofia-sequencia-numeros-v1',
        'description': 'Ativa quando dois giros consecutivos são números vizinhos na ordem numérica.',
        'category': 'numeric_adjacent',
        'tags': ['sequencia', 'numeros', 'builder'],
        'selectionMode': 'automatic',
        'nodes': [
            _trigger(12),
            _condicao('cond_adj_numeric', 'adjacent-in-list', 'Adjacente Numérico (0–36)',
                      {'janela': 12, 'list': list(range(37)), 'circular': False, 'outputNumbers': []}),
            _sinal('signal_sequencia', 'Sinal Sequência de Números', 'Números consecutivos detectados.'),
        ],
        'connections': _ligacoes(
            ('trigger_1', 'cond_adj_numeric', 'success'),
            ('cond_adj_numeric', 'signal_sequencia', 'success'),
        ),
    },
]

for _template in TEMPLATES_OFICIAIS:
    _template.setdefault('schemaVersion', '1.0.0')
    _template.setdefault('version', '1.0.0')
    _template.setdefault('gating', {})


def listar_templates() -> List[Dict[str, Any]]:
    """Resumo de todos os templates (sem o grafo)"""
    return [
        {
            'slug': t['slug'],
            'name': t['name'],
            'description': t['description'],
            'category': t['category'],
            'tags': list(t['tags']),
            'selectionMode': t['selectionMode'],
        }
        for t in TEMPLATES_OFICIAIS
    ]


def obter_template(slug: str) -> Optional[Dict[str, Any]]:
    """Template completo (cópia), pronto para compilar_estrategia()"""
    for template in TEMPLATES_OFICIAIS:
        if template['slug'] == slug:
            return copy.deepcopy(template)
    return None
