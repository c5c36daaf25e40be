"""
core/repositorio.py

Armazenamento das estratégias compiladas

O repositório é criado no startup (main.py) e guardado em app.state;
as rotas o recebem pela request.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from core.compilador import CompiledStrategy, carregar_artefato, exportar_artefato

logger = logging.getLogger(__name__)


def _resumo(slug: str, metadata: Dict[str, Any]) -> Dict[str, Any]:
    return {
        'slug': slug,
        'name': metadata.get('name'),
        'description': metadata.get('description'),
        'version': metadata.get('version'),
        'category': metadata.get('category'),
        'selectionMode': metadata.get('selectionMode'),
        'schemaVersion': metadata.get('schemaVersion'),
    }


def _avisar_colisao(slug: str, nome_anterior: Optional[str], nome_novo: str):
    if nome_anterior is not None and nome_anterior != nome_novo:
        logger.warning(
            f"⚠️ Slug '{slug}' já pertencia a '{nome_anterior}'; substituída por '{nome_novo}'"
        )


class StrategyRepository(ABC):
    """Interface dos repositórios de estratégias (chave = slug do nome)"""

    @abstractmethod
    async def salvar(self, estrategia: CompiledStrategy) -> Dict[str, Any]:
        """
        Grava (ou substitui) a estratégia e retorna o resumo

        Nomes diferentes podem gerar o mesmo slug; nesse caso a anterior
        é substituída e um aviso é registrado no log.
        """

    @abstractmethod
    async def obter(self, slug: str) -> Optional[CompiledStrategy]:
        """Estratégia pelo slug, ou None"""

    @abstractmethod
    async def listar(self) -> List[Dict[str, Any]]:
        """Resumos ordenados por slug"""

    @abstractmethod
    async def remover(self, slug: str) -> bool:
        """True se havia uma estratégia com esse slug"""


class InMemoryStrategyRepository(StrategyRepository):
    """
    Repositório em memória (padrão em desenvolvimento e nos testes)

    Guarda o artefato exportado, não o objeto: o que sai de obter()
    passou pela mesma verificação de checksum do repositório MongoDB.
    """

    def __init__(self):
        self._artefatos: Dict[str, str] = {}

    async def salvar(self, estrategia: CompiledStrategy) -> Dict[str, Any]:
        anterior = self._artefatos.get(estrategia.slug)
        if anterior is not None:
            _avisar_colisao(estrategia.slug, carregar_artefato(anterior).name, estrategia.name)
        self._artefatos[estrategia.slug] = exportar_artefato(estrategia)
        logger.info(f"💾 Estratégia salva em memória: {estrategia.slug}")
        return _resumo(estrategia.slug, estrategia.METADATA)

    async def obter(self, slug: str) -> Optional[CompiledStrategy]:
        texto = self._artefatos.get(slug)
        return carregar_artefato(texto) if texto is not None else None

    async def listar(self) -> List[Dict[str, Any]]:
        resumos = []
        for slug in sorted(self._artefatos):
            resumos.append(_resumo(slug, carregar_artefato(self._artefatos[slug]).METADATA))
        return resumos

    async def remover(self, slug: str) -> bool:
        removido = self._artefatos.pop(slug, None) is not None
        if removido:
            logger.info(f"🗑️ Estratégia removida: {slug}")
        return removido


class MongoStrategyRepository(StrategyRepository):
    """
    Repositório MongoDB (motor)

    Documento: {_id: slug, slug, metadata, artifact}
    """

    def __init__(self, collection):
        self.collection = collection

    async def salvar(self, estrategia: CompiledStrategy) -> Dict[str, Any]:
        documento = {
            '_id': estrategia.slug,
            'slug': estrategia.slug,
            'metadata': estrategia.METADATA,
            'artifact': exportar_artefato(estrategia),
        }
        anterior = await self.collection.find_one({'_id': estrategia.slug})
        if anterior is not None:
            _avisar_colisao(estrategia.slug, (anterior.get('metadata') or {}).get('name'), estrategia.name)
        await self.collection.replace_one({'_id': estrategia.slug}, documento, upsert=True)
        logger.info(f"💾 Estratégia salva no MongoDB: {estrategia.slug}")
        return _resumo(estrategia.slug, documento['metadata'])

    async def obter(self, slug: str) -> Optional[CompiledStrategy]:
        documento = await self.collection.find_one({'_id': slug})
        if documento is None:
            return None
        return carregar_artefato(documento['artifact'])

    async def listar(self) -> List[Dict[str, Any]]:
        cursor = self.collection.find({}, {'slug': 1, 'metadata': 1}).sort('slug', 1)
        resumos = []
        async for documento in cursor:
            resumos.append(_resumo(documento['slug'], documento.get('metadata') or {}))
        return resumos

    async def remover(self, slug: str) -> bool:
        resultado = await self.collection.delete_one({'_id': slug})
        if resultado.deleted_count:
            logger.info(f"🗑️ Estratégia removida do MongoDB: {slug}")
        return resultado.deleted_count > 0
