"""
Provenance FastAPI backend.

REST boundary for the detection service. Authentication and rate limiting
are applied upstream of this app.
"""

import time
from functools import lru_cache
from typing import Dict, List

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, field_validator

from provenance import __version__
from provenance.core.config import DetectionConfig
from provenance.core.exceptions import ProvenanceError
from provenance.core.log import get_logger
from provenance.models.detection import DetectionService
from provenance.storage.memory import InMemoryResultStore


logger = get_logger(__name__)

MAX_HISTORY_LIMIT = 50

app = FastAPI(
    title="Provenance API",
    description="Human-vs-machine authorship detection",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache(maxsize=1)
def get_config() -> DetectionConfig:
    return DetectionConfig.from_env()


@lru_cache(maxsize=1)
def get_result_store() -> InMemoryResultStore:
    return InMemoryResultStore(max_size=get_config().history_size)


@lru_cache(maxsize=1)
def get_detection_service() -> DetectionService:
    return DetectionService.from_config(get_config(), store=get_result_store())


class DetectionRequest(BaseModel):
    """Request model for text detection"""
    text: str = Field(..., description="Text to analyze")

    @field_validator("text")
    @classmethod
    def text_within_bounds(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Text is required")
        limit = get_config().max_text_length
        if len(value) > limit:
            raise ValueError(f"Text too long (max {limit:,} characters)")
        return value


class IndicatorModel(BaseModel):
    score: float
    description: str


class DetectionResponse(BaseModel):
    """Response model for text detection"""
    isAIGenerated: bool = Field(..., description="Whether the text is classified as AI-written")
    confidence: float = Field(..., description="Consensus AI likelihood (0-1)")
    reasoning: List[str] = Field(..., description="Provider and analysis reasoning")
    indicators: Dict[str, IndicatorModel] = Field(..., description="Per-feature indicators")
    modelConsensus: str = Field(..., description="How many judge models contributed")
    timestamp: str = Field(..., description="ISO-8601 result time")
    metadata: Dict = Field(default_factory=dict, description="Request metadata")


class HistoryResponse(BaseModel):
    detections: List[DetectionResponse]


@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "provenance"}


@app.post("/api/detect", response_model=DetectionResponse)
async def detect_text(
    request: DetectionRequest,
    service: DetectionService = Depends(get_detection_service),
):
    """
    Analyze text for machine authorship.

    Blends the available judge providers with linguistic analysis; when no
    provider answers, the linguistic score is returned on its own.
    """
    start_time = time.time()

    try:
        result = await service.detect(request.text)
    except ProvenanceError as e:
        logger.exception("detect_request_failed", error=str(e))
        raise HTTPException(status_code=500, detail=f"Analysis failed: {e}")

    payload = result.to_dict()
    payload["metadata"] = {
        "textLength": len(request.text),
        "processingTimeMs": (time.time() - start_time) * 1000,
        "version": __version__,
    }
    return DetectionResponse(**payload)


@app.get("/api/history", response_model=HistoryResponse)
async def detection_history(
    limit: int = Query(10, ge=1),
    store: InMemoryResultStore = Depends(get_result_store),
):
    """Most recent detection results, newest first"""
    results = store.recent(min(limit, MAX_HISTORY_LIMIT))
    return HistoryResponse(detections=[DetectionResponse(**r.to_dict()) for r in results])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
