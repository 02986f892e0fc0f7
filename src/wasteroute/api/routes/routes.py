"""Collection route endpoints."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, HTTPException, status

from ...schemas.routing import OptimizedRouteResponse, RouteOptimizationRequest, StoredRouteSummary
from ...services.routing.service import get_saved_route, list_saved_routes, optimize_collection_route

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post("/optimize", response_model=OptimizedRouteResponse, status_code=status.HTTP_200_OK)
def optimize(payload: RouteOptimizationRequest) -> OptimizedRouteResponse:
    try:
        return optimize_collection_route(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error optimizing collection route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to optimize route: {str(exc)}",
        ) from exc


@router.get("", response_model=List[StoredRouteSummary])
def list_routes() -> List[StoredRouteSummary]:
    return list_saved_routes()


@router.get("/{route_id}", response_model=OptimizedRouteResponse)
def get_route(route_id: str) -> OptimizedRouteResponse:
    try:
        return get_saved_route(route_id)
    except FileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
