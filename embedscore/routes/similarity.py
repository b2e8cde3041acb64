from functools import lru_cache
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from embedscore.config import Settings, load_settings
from embedscore.embeddings import EmbeddingProvider, get_provider
from embedscore.errors import ConfigurationError, CorpusReadError, InvalidArgument, ProviderError, SimilarityError
from embedscore.models import CorpusKind
from embedscore.pipeline import corpus_paths, query
from embedscore.similarity import classify
from embedscore.store import files_signature
from embedscore.utils import make_cache_key, query_response_cache

router = APIRouter(prefix="/similarity", tags=["similarity"])


# -------------------------------
# Dependencies
# -------------------------------
@lru_cache()
def get_settings() -> Settings:
    return load_settings()


@lru_cache()
def _cached_provider(settings: Settings) -> EmbeddingProvider:
    return get_provider(settings)


def get_embedding_provider(settings: Settings = Depends(get_settings)) -> EmbeddingProvider:
    try:
        return _cached_provider(settings)
    except ConfigurationError as e:
        raise HTTPException(status_code=500, detail=str(e))


# -------------------------------
# Pydantic models
# -------------------------------
class SimilarityRequest(BaseModel):
    text: str
    corpus: CorpusKind = CorpusKind.REVIEWS


class ScoredItem(BaseModel):
    label: str
    raw_score: float
    percentage: float
    similar: bool


class SimilarityResponse(BaseModel):
    corpus: CorpusKind
    results: List[ScoredItem] = []
    conclusion: Optional[str] = None
    threshold: float
    cached: bool = False


# -------------------------------
# Similarity endpoint
# -------------------------------
@router.post("", response_model=SimilarityResponse)
def similarity_endpoint(
    req: SimilarityRequest,
    settings: Settings = Depends(get_settings),
    provider: EmbeddingProvider = Depends(get_embedding_provider),
):
    # 1) Input validation
    if not req.text.strip():
        raise HTTPException(status_code=400, detail="text is empty")

    # 2) Cache check
    version = files_signature(corpus_paths(req.corpus, settings.data_dir))
    cache_key = make_cache_key(req.corpus.value, req.text, version)
    cached = query_response_cache.get(cache_key)
    if cached:
        resp = SimilarityResponse(**cached)
        resp.cached = True
        return resp

    # 3) Score against the corpus
    try:
        report = query(req.text, provider, req.corpus, settings.data_dir)
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CorpusReadError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except ProviderError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except SimilarityError as e:
        raise HTTPException(status_code=422, detail=str(e))

    # 4) Build, cache and return
    resp = SimilarityResponse(
        corpus=report.corpus,
        results=[
            ScoredItem(label=str(r.label), raw_score=r.raw_score, percentage=r.percentage, similar=similar)
            for r, similar in classify(report.results, settings.threshold)
        ],
        conclusion=str(report.conclusion) if report.conclusion else None,
        threshold=settings.threshold,
    )
    query_response_cache.set(cache_key, resp.model_dump())
    return resp
