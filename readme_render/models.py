from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


RelativeLinks = Literal["rewrite", "deny"]


class RenderRequest(BaseModel):
    text: str = ""
    base_url: str | None = Field(default=None, description="Repository URL used as the base for relative links.")


class RenderResponse(BaseModel):
    html: str
    relative_links: RelativeLinks
