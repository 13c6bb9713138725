from collections import OrderedDict
import random

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field
from typing import Optional

from markov_service.config import ConfigurationError, settings
from markov_service.services.markov import MarkovChain, train_from_corpus
from markov_service.utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/markov", tags=["markov"])

# In-memory model cache (process lifetime only, oldest evicted first)
MODEL_CACHE: "OrderedDict[str, MarkovChain]" = OrderedDict()


class TrainRequest(BaseModel):
    corpus: str
    order: int = Field(default=settings.MARKOV_ORDER, ge=1, le=settings.MARKOV_MAX_ORDER)
    kind: str = "word"
    model_name: str = "default"


class GenerateRequest(BaseModel):
    model_name: str = "default"
    seed: str
    amount: int = Field(default=settings.MARKOV_AMOUNT, ge=0, le=settings.MARKOV_MAX_AMOUNT)
    rng_seed: Optional[int] = None


def _get_model(name: str) -> MarkovChain:
    model = MODEL_CACHE.get(name)
    if not model:
        raise HTTPException(status_code=404, detail="model not found, train first")
    return model


@router.post("/train")
async def train(req: TrainRequest):
    if not req.corpus:
        raise HTTPException(status_code=400, detail="corpus is empty")
    try:
        model = train_from_corpus(req.corpus, order=req.order, kind=req.kind)
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    MODEL_CACHE[req.model_name] = model
    MODEL_CACHE.move_to_end(req.model_name)
    while len(MODEL_CACHE) > settings.MARKOV_MAX_MODELS:
        evicted, _ = MODEL_CACHE.popitem(last=False)
        logger.info(f"[MARKOV] evicted model '{evicted}'")

    stats = model.stats()
    logger.info(f"[MARKOV] trained '{req.model_name}' ({stats.node_count} nodes)")
    return {
        "ok": True,
        "model": req.model_name,
        "order": model.order,
        "kind": model.kind.value,
        "stats": {
            "node_count": stats.node_count,
            "depth": stats.depth,
            "vocabulary_size": stats.vocabulary_size,
            "total_count": stats.total_count,
        },
    }


@router.post("/generate")
async def generate(req: GenerateRequest):
    model = _get_model(req.model_name)
    rng = random.Random(req.rng_seed) if req.rng_seed is not None else None
    try:
        tokens = model.generate(req.seed, req.amount, rng=rng)
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"ok": True, "data": {"tokens": tokens, "text": model.render(req.seed, tokens)}}


@router.get("/models")
async def list_models():
    return {"ok": True, "data": {"models": list(MODEL_CACHE.keys())}}


@router.get("/models/{name}/graph", response_class=PlainTextResponse)
async def graph(name: str, source: str = "probability"):
    model = _get_model(name)
    if source not in ("probability", "counts"):
        raise HTTPException(status_code=400, detail="source should be 'probability' or 'counts'")
    return PlainTextResponse(model.to_dot(source), media_type="text/vnd.graphviz")


@router.delete("/models/{name}")
async def delete_model(name: str):
    _get_model(name)
    del MODEL_CACHE[name]
    return {"ok": True, "model": name}
