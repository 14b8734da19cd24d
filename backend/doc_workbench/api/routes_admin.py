"""Administrative routes for Doc Workbench."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from doc_workbench.api.dependencies import get_provider_registry
from doc_workbench.core.metrics import metrics_response
from doc_workbench.llm.providers import ProviderRegistry

router = APIRouter()


@router.get("/health", summary="Liveness check")
def health() -> dict[str, bool]:
    return {"ok": True}


@router.get("/providers", summary="List language-model providers")
def list_providers(registry: ProviderRegistry = Depends(get_provider_registry)) -> dict[str, object]:
    return {"default": registry.settings.default_provider, "providers": registry.names()}


@router.get("/metrics", summary="Prometheus metrics")
def get_metrics():
    return metrics_response()


__all__ = ["router"]
