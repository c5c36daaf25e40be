"""
Rotas do catálogo de templates oficiais
"""

from fastapi import APIRouter, HTTPException

from config.templates import listar_templates, obter_template

router = APIRouter()


@router.get("")
async def listar():
    """
    Lista os templates disponíveis
    """
    templates = listar_templates()
    return {"success": True, "total": len(templates), "templates": templates}


@router.get("/{slug}")
async def obter(slug: str):
    """
    Template completo, no formato aceito por /api/estrategias/compilar
    """
    template = obter_template(slug)
    if template is None:
        raise HTTPException(status_code=404, detail=f"Template '{slug}' não encontrado")
    return {"success": True, "template": template}
