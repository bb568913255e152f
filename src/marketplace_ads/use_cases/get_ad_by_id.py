"""Get ad by ID use case."""

from __future__ import annotations

from dataclasses import dataclass

from marketplace_ads.cache.ads_cache import AdsCache
from marketplace_ads.domain.errors import NotFoundError, ValidationError
from marketplace_ads.domain.ids import parse_id
from marketplace_ads.domain.views import AdView
from marketplace_ads.infra.retry import Retry, call_with_retry
from marketplace_ads.ports.ad_store import AdStore
from marketplace_ads.use_cases.ad_views import AdViewBuilder, load_view


@dataclass(frozen=True, slots=True)
class GetAdByIdRequest:
    """Request to get an ad by ID."""

    ad_id: str


@dataclass(frozen=True, slots=True)
class GetAdByIdResponse:
    """Response containing the requested ad."""

    ad: AdView


def invalid_id_error(field: str = "id") -> ValidationError:
    return ValidationError(
        errors=[
            {
                "field": field,
                "message": "Must be a valid UUID format",
                "code": "INVALID_UUID",
            }
        ]
    )


class GetAdById:
    """
    Use case for retrieving a single ad by ID.

    Responsibilities:
    - Validate ad_id format (must be valid UUID)
    - Serve from the single-ad cache, falling back to a fresh joined read
    - Raise NotFoundError if the ad doesn't exist
    """

    def __init__(
        self,
        ad_store: AdStore,
        view_builder: AdViewBuilder,
        cache: AdsCache | None = None,
        retry: Retry = call_with_retry,
    ) -> None:
        """
        Initialize use case with dependencies.

        Args:
            ad_store: Store for ad data access
            view_builder: Denormalizes joined rows
            cache: Optional ads cache
            retry: Retry policy for store reads
        """
        self._ad_store = ad_store
        self._view_builder = view_builder
        self._cache = cache
        self._retry = retry

    def execute(self, request: GetAdByIdRequest) -> GetAdByIdResponse:
        """
        Execute the get ad by ID use case.

        Raises:
            ValidationError: If ad_id is not a valid UUID format
            NotFoundError: If the ad doesn't exist
        """
        ad_id = parse_id(request.ad_id)
        if ad_id is None:
            raise invalid_id_error()

        if self._cache is not None:
            cached = self._cache.get_ad(ad_id)
            if cached is not None:
                return GetAdByIdResponse(ad=cached)

        view = self._retry(lambda: load_view(self._ad_store, self._view_builder, ad_id))
        if view is None:
            raise NotFoundError(resource="Ad", identifier=request.ad_id)

        if self._cache is not None:
            self._cache.set_ad(view)

        return GetAdByIdResponse(ad=view)
