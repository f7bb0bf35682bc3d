"""Route Binding Routes — create and delete routes under registered domains."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from app.api.dependencies import get_route_bindings
from app.schemas.route import RouteCreate, RouteResponse
from app.services.route_bindings import RouteBindings

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/routes", tags=["routes"])


@router.post("", response_model=RouteResponse, status_code=status.HTTP_201_CREATED)
async def create_route(
    body: RouteCreate, bindings: RouteBindings = Depends(get_route_bindings),
):
    return await bindings.create_route(body.domain_id, body.space_id, body.host)


@router.delete("/{route_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_route(
    route_id: UUID, bindings: RouteBindings = Depends(get_route_bindings),
):
    await bindings.delete_route(route_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
