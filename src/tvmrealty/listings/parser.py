"""
Listing marker extraction from search snippets.

Pulls an asking price and a plot size out of free-text titles/URLs and
classifies the listing into a price tier. The first match in the text
wins; a snippet that mentions two prices keeps the first one.
"""

import math
import re
import unicodedata
from typing import Iterable, Optional
from urllib.parse import urlparse

import structlog

from tvmrealty.config import PROPERTY_LISTING_DOMAINS
from tvmrealty.models import PropertyMarker, SearchResult

logger = structlog.get_logger()

SQFT_PER_CENT = 435.6

# Price tier thresholds in lakhs
PREMIUM_ABOVE = 100.0
MID_RANGE_ABOVE = 40.0

MARKER_ID_OFFSET = 1000


class ListingParser:
    """Regex extractor for price and size facts in listing snippets."""

    # ₹1.5 Cr, 1.5 Crore, 50 Lakhs, 50 L, Rs. 50 Lakhs, 1.5cr, 50lakh, INR 45 lac
    PRICE_PATTERN = re.compile(
        r"(?:₹|rs\.?\s*|inr\s*)?(\d[\d,]*(?:\.\d+)?)\s*"
        r"(crores?|cr|lakhs?|lacs?|l)(?![a-z])",
        flags=re.IGNORECASE,
    )

    # 5 cents, 5.5 cent, 1500 sqft, 1500 sq ft, 1500sq.ft, 1,500 square feet
    SIZE_PATTERN = re.compile(
        r"(\d[\d,]*(?:\.\d+)?)\s*"
        r"(cents?|sq\.?\s*ft\.?|sqft|square\s*feet)(?![a-z])",
        flags=re.IGNORECASE,
    )

    def __init__(self, listing_domains: Optional[list[str]] = None):
        self.listing_domains = listing_domains or PROPERTY_LISTING_DOMAINS

    def _normalize(self, text: str) -> str:
        # NFKC folds full-width digits; the rupee sign survives
        normalized = unicodedata.normalize("NFKC", text or "")
        return re.sub(r"\s+", " ", normalized).strip()

    @staticmethod
    def _to_number(token: str) -> Optional[float]:
        try:
            value = float(token.replace(",", ""))
        except ValueError:
            return None
        return value if math.isfinite(value) else None

    def extract_price(self, text: str) -> Optional[float]:
        """
        Asking price in lakhs, or None.

        Crore amounts are converted (1 crore = 100 lakhs). A zero amount
        counts as no price.
        """
        match = self.PRICE_PATTERN.search(self._normalize(text))
        if not match:
            return None

        value = self._to_number(match.group(1))
        if not value:
            return None

        unit = match.group(2).lower()
        if unit.startswith("cr"):
            value *= 100
        return value if math.isfinite(value) else None

    def extract_size(self, text: str) -> Optional[float]:
        """Plot size in cents, or None. Square feet are converted at 435.6 sqft/cent."""
        match = self.SIZE_PATTERN.search(self._normalize(text))
        if not match:
            return None

        value = self._to_number(match.group(1))
        if not value:
            return None

        unit = match.group(2).lower()
        if unit.startswith("cent"):
            return value
        return value / SQFT_PER_CENT

    @staticmethod
    def classify_tier(price_lakhs: Optional[float]) -> str:
        """Premium (>1 Cr), Mid-Range (>40 L), Budget, or Unknown without a price."""
        if price_lakhs is None:
            return "Unknown"
        if price_lakhs > PREMIUM_ABOVE:
            return "Premium"
        if price_lakhs > MID_RANGE_ABOVE:
            return "Mid-Range"
        return "Budget"

    def is_listing_site(self, url: str) -> bool:
        """Whether the URL belongs to a known property listing portal."""
        host = (urlparse(url).netloc or url or "").lower()
        return any(domain in host for domain in self.listing_domains)

    def parse(self, results: Iterable[SearchResult]) -> list[PropertyMarker]:
        """
        Build markers from search results.

        A result is kept when it has a price, a size, or comes from a
        listing portal. Portal results without any extracted fact are kept
        on purpose: partial markers are better than an empty map.
        """
        results = list(results)
        markers = []

        for index, result in enumerate(results):
            text = f"{result.title} {result.url}"
            price = self.extract_price(text)
            size = self.extract_size(text)
            tier = self.classify_tier(price)

            if price is None and size is None and not self.is_listing_site(result.url):
                logger.debug("Snippet skipped", title=result.title[:80])
                continue

            markers.append(
                PropertyMarker(
                    id=MARKER_ID_OFFSET + index,
                    title=result.title,
                    link=result.url,
                    estimated_price=price,
                    estimated_size=size,
                    tier=tier,
                )
            )

        logger.info("Listing markers parsed", snippets=len(results), markers=len(markers))
        return markers


def parse_property_markers(results: Iterable[SearchResult]) -> list[PropertyMarker]:
    """Parse markers with the default listing portal allowlist."""
    return ListingParser().parse(results)
