"""FastAPI dependency injection factories.

The document store is built once from settings and shared; every other
factory wraps it in the repository or service a route needs. Tests replace
``get_store`` (and ``get_settings`` where behavior depends on it) through
``app.dependency_overrides``.
"""

from functools import lru_cache

from fastapi import Depends

from editorfinder.cleanup.engine import CleanupEngine
from editorfinder.config.settings import Settings, get_settings
from editorfinder.knowledge.service import KnowledgeService
from editorfinder.repositories.editors import EditorRepository
from editorfinder.repositories.knowledge import KnowledgeRepository
from editorfinder.research.apify import ApifyClient
from editorfinder.research.auto_research import AutoResearchService
from editorfinder.research.entries import ResearchService
from editorfinder.store.base import DocumentStore
from editorfinder.store.firestore import FirestoreDocumentStore
from editorfinder.sync.orchestrator import SyncOrchestrator
from editorfinder.sync.tmdb import TMDbClient


@lru_cache(maxsize=1)
def _firestore_store() -> FirestoreDocumentStore:
    return FirestoreDocumentStore.from_settings(get_settings())


async def get_store() -> DocumentStore:
    return _firestore_store()


# ---------------------------------------------------------------------------
# Knowledge
# ---------------------------------------------------------------------------


async def get_knowledge_service(
    store: DocumentStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> KnowledgeService:
    return KnowledgeService(
        KnowledgeRepository(store),
        create_missing=settings.KNOWLEDGE_UPDATE_CREATES_MISSING,
    )


# ---------------------------------------------------------------------------
# Editors / cleanup
# ---------------------------------------------------------------------------


async def get_editor_repo(
    store: DocumentStore = Depends(get_store),
) -> EditorRepository:
    return EditorRepository(store)


async def get_cleanup_engine(
    store: DocumentStore = Depends(get_store),
) -> CleanupEngine:
    return CleanupEngine(store)


# ---------------------------------------------------------------------------
# Sync
# ---------------------------------------------------------------------------


async def get_tmdb_client(
    settings: Settings = Depends(get_settings),
) -> TMDbClient:
    return TMDbClient(settings.TMDB_API_KEY)


async def get_sync_orchestrator(
    store: DocumentStore = Depends(get_store),
    tmdb: TMDbClient = Depends(get_tmdb_client),
    settings: Settings = Depends(get_settings),
) -> SyncOrchestrator:
    return SyncOrchestrator(store, tmdb, delay_ms=settings.SCRAPING_DELAY_MS)


# ---------------------------------------------------------------------------
# Research
# ---------------------------------------------------------------------------


async def get_research_service(
    store: DocumentStore = Depends(get_store),
) -> ResearchService:
    return ResearchService(store)


async def get_apify_client(
    settings: Settings = Depends(get_settings),
) -> ApifyClient:
    return ApifyClient(settings.APIFY_TOKEN)


async def get_auto_research_service(
    store: DocumentStore = Depends(get_store),
    provider: ApifyClient = Depends(get_apify_client),
    settings: Settings = Depends(get_settings),
) -> AutoResearchService:
    return AutoResearchService(store, provider, delay_ms=settings.SCRAPING_DELAY_MS)
