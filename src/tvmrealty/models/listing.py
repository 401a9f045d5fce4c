"""
Search snippets and the listing markers extracted from them.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field

MarkerTier = Literal["Premium", "Mid-Range", "Budget", "Unknown"]


class SearchResult(BaseModel):
    """A ranked {title, url} pair returned by the search collaborator."""

    title: str = ""
    url: str = ""


class PropertyMarker(BaseModel):
    """Structured listing facts extracted from one search snippet."""

    id: int = Field(..., description="Stable marker id (1000 + snippet index)")
    title: str
    link: str
    estimated_price: Optional[float] = Field(
        None, description="Asking price in lakhs"
    )
    estimated_size: Optional[float] = Field(
        None, description="Plot size in cents"
    )
    tier: MarkerTier = "Unknown"
