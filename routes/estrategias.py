"""
Rotas das estratégias do builder

- POST /avaliar: avalia um grafo em edição contra um histórico simulado
- POST /compilar: compila, guarda no repositório e devolve o artefato
- GET/DELETE /{slug} e POST /{slug}/sinal: estratégias já compiladas
"""

from fastapi import APIRouter, Body, HTTPException, Request
from typing import Any, Dict, List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
import logging

from core.avaliador import avaliar_estrategia
from core.compilador import compilar_estrategia, exportar_artefato, nome_arquivo_artefato
from core.grafo import carregar_grafo
from core.historico import normalizar_historico, parse_historico_texto

logger = logging.getLogger(__name__)

router = APIRouter()


# Modelos Pydantic
class HistoricoRequest(BaseModel):
    """Histórico como lista (mais recente por último) ou texto separado por vírgulas"""
    history: List[Any] = Field(default_factory=list, description="Giros, mais recente por último")
    historyInput: Optional[str] = Field(None, description="Ex: '1, 3, vermelho, 17'")
    selectionMode: Optional[str] = Field(None, description="manual | automatic | hybrid")
    gating: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "history": [5, 23, 10, 17],
                "selectionMode": "automatic",
            }
        }
    )

    def ctx(self) -> Dict[str, Any]:
        ctx = {}
        if self.selectionMode:
            ctx['selectionMode'] = self.selectionMode
        if self.gating:
            ctx['gating'] = self.gating
        return ctx


class AvaliarRequest(HistoricoRequest):
    nodes: List[Dict[str, Any]] = Field(default_factory=list)
    connections: List[Dict[str, Any]] = Field(default_factory=list)
    name: Optional[str] = None

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {
                "nodes": [
                    {"id": "c1", "type": "condition", "subtype": "neighbors", "config": {"numero": 17, "raio": 2}},
                    {"id": "l1", "type": "logic", "config": {"operador": "AND"}},
                    {"id": "s1", "type": "signal", "config": {"numeros": []}},
                ],
                "connections": [
                    {"source": "c1", "target": "l1", "type": "condition"},
                    {"source": "l1", "target": "s1", "type": "success"},
                ],
                "historyInput": "5, 23, 10, 17",
            }
        },
    )


def _historico(body: HistoricoRequest, request: Request) -> List[Any]:
    if body.historyInput:
        tokens = parse_historico_texto(body.historyInput)
    else:
        tokens = normalizar_historico(body.history)
    limite = request.app.state.settings.MAX_HISTORY_SIZE
    return tokens[-limite:]


def _repositorio(request: Request):
    return request.app.state.repositorio


@router.post("/avaliar")
async def avaliar(request: Request, body: AvaliarRequest):
    """
    Avalia o grafo do builder sem compilar (resolvedor de ações)
    """
    if not body.nodes:
        raise ValueError("nodes required")

    graph = carregar_grafo(body.model_dump(exclude={'history', 'historyInput'}, exclude_none=True))
    history = _historico(body, request)
    resultado = avaliar_estrategia(graph, history, body.ctx())

    return {
        "success": True,
        "history": history,
        **resultado.to_dict(),
        "timestamp": datetime.now().isoformat(),
    }


@router.post("/compilar")
async def compilar(request: Request, payload: Dict[str, Any] = Body(...)):
    """
    Compila o grafo + metadados, salva no repositório e devolve o artefato
    """
    estrategia = compilar_estrategia(payload)
    resumo = await _repositorio(request).salvar(estrategia)

    return {
        "success": True,
        **resumo,
        "fileName": nome_arquivo_artefato(estrategia.name),
        "metadata": estrategia.METADATA,
        "artifact": exportar_artefato(estrategia),
        "timestamp": datetime.now().isoformat(),
    }


@router.get("")
async def listar(request: Request):
    """
    Lista as estratégias compiladas
    """
    estrategias = await _repositorio(request).listar()
    return {"success": True, "total": len(estrategias), "estrategias": estrategias}


@router.get("/{slug}")
async def obter(request: Request, slug: str):
    """
    Estratégia compilada (metadados + grafo)
    """
    estrategia = await _repositorio(request).obter(slug)
    if estrategia is None:
        raise HTTPException(status_code=404, detail=f"Estratégia '{slug}' não encontrada")
    return {"success": True, "slug": slug, **estrategia.to_dict()}


@router.post("/{slug}/sinal")
async def gerar_sinal(request: Request, slug: str, body: HistoricoRequest):
    """
    Executa uma estratégia compilada: checkStrategy + generateSignal
    """
    estrategia = await _repositorio(request).obter(slug)
    if estrategia is None:
        raise HTTPException(status_code=404, detail=f"Estratégia '{slug}' não encontrada")

    resultado = estrategia.avaliar(_historico(body, request), body.ctx())
    logger.info(
        f"🎯 Sinal {slug}: {'ativo' if resultado.should_activate else 'inativo'} "
        f"({len(resultado.numbers)} números)"
    )

    return {
        "success": True,
        "slug": slug,
        **resultado.to_dict(),
        "timestamp": datetime.now().isoformat(),
    }


@router.delete("/{slug}")
async def remover(request: Request, slug: str):
    """
    Remove uma estratégia compilada
    """
    if not await _repositorio(request).remover(slug):
        raise HTTPException(status_code=404, detail=f"Estratégia '{slug}' não encontrada")
    return {"success": True, "slug": slug}
