"""
Listings module.

Web search for locality listings and extraction of listing markers.
"""

from tvmrealty.listings.parser import (
    SQFT_PER_CENT,
    ListingParser,
    parse_property_markers,
)
from tvmrealty.listings.search import (
    BaseSearchClient,
    GeminiSearchClient,
    NullSearchClient,
    get_search_client,
    rank_search_results,
)

__all__ = [
    # Parser
    "SQFT_PER_CENT",
    "ListingParser",
    "parse_property_markers",
    # Search
    "BaseSearchClient",
    "GeminiSearchClient",
    "NullSearchClient",
    "get_search_client",
    "rank_search_results",
]
