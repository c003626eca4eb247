# ruff: noqa: TC001
from __future__ import annotations

from fastapi import APIRouter

from leave_management.api.deps import RepositoriesDep
from leave_management.schemas.batch import BatchRequest, BatchResponse
from leave_management.services import batch as batch_service

batch_router = APIRouter(prefix="/batch", tags=["batch"])


@batch_router.post("", response_model=BatchResponse)
async def submit_batch(payload: BatchRequest, repos: RepositoriesDep) -> BatchResponse:
    """Apply several entity operations atomically."""
    return await batch_service.submit_batch(repos, payload)
