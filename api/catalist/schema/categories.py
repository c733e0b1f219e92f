from __future__ import annotations

from pydantic import BaseModel

from catalist.schema.results import ContentType


class CategoryRouteRead(BaseModel):
    key: str
    adapter_name: str | None = None
    content_type: ContentType | None = None
    icon: str
    label: str
    color: str
    display_name: str
