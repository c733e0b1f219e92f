from __future__ import annotations

from fastapi import APIRouter

from catalist.schema.categories import CategoryRouteRead
from catalist.services.category_router import CategoryRoute, category_display_name, known_routes, route_category

router = APIRouter()


def _serialize(route: CategoryRoute) -> CategoryRouteRead:
    return CategoryRouteRead(
        key=route.key,
        adapter_name=route.adapter_name,
        content_type=route.content_type,
        icon=route.display.icon,
        label=route.display.label,
        color=route.display.color,
        display_name=category_display_name(route.key),
    )


@router.get("", response_model=list[CategoryRouteRead])
async def list_categories() -> list[CategoryRouteRead]:
    return [_serialize(route) for route in known_routes()]


@router.get("/{key}", response_model=CategoryRouteRead)
async def get_category(key: str) -> CategoryRouteRead:
    """Unknown keys resolve to the default route rather than 404."""
    return _serialize(route_category(key))
