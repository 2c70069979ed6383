"""Catalog lookup routes."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from parts_agent.api.schemas import PartResponse
from parts_agent.services.catalog import Part, StaticCatalog


def create_parts_router(catalog: StaticCatalog) -> APIRouter:
    router = APIRouter(prefix="/parts", tags=["parts"])

    @router.get("/search", response_model=list[PartResponse], response_model_by_alias=True)
    async def search_parts(query: str | None = None) -> list[PartResponse]:
        if not query or not query.strip():
            raise HTTPException(status_code=400, detail="query parameter is required")
        return [_to_response(part) for part in catalog.search_parts(query)]

    @router.get("/{part_number}", response_model=PartResponse, response_model_by_alias=True)
    async def get_part(part_number: str) -> PartResponse:
        part = catalog.get_part_data(part_number)
        if part is None:
            raise HTTPException(status_code=404, detail=f"Part {part_number} not found")
        return _to_response(part)

    return router


def _to_response(part: Part) -> PartResponse:
    return PartResponse(
        part_number=part.part_number,
        name=part.name,
        price=part.price,
        category=part.category,
        description=part.description,
        compatibility=list(part.compatibility),
        image_url=part.image_url,
        buy_link=part.buy_link,
        in_stock=part.in_stock,
    )
