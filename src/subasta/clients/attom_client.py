"""
ATTOM Property Data Client

Fetches foreclosure listings from the ATTOM property API with tiered
fallback: foreclosure snapshot, then basic property search enhanced with
synthetic foreclosure data, then a curated demo dataset.
"""
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from config.settings import settings
from src.subasta.clients.demo_data import build_demo_response, enhance_with_foreclosure
from src.subasta.exceptions import ConfigurationError, UpstreamAuthError, UpstreamUnavailable
from src.subasta.models.attom import AttomProperty, AttomResponse
from src.subasta.utils.logger import get_logger

logger = get_logger(__name__)

FORECLOSURE_ENDPOINT = "/foreclosure/snapshot"
PROPERTY_ADDRESS_ENDPOINT = "/property/address"
PROPERTY_DETAIL_ENDPOINT = "/property/detail"
BASIC_TIER_MAX_PAGE_SIZE = 10


class AttomClient:
    """
    HTTP client for the ATTOM property API.

    Every request carries the API key as the ``apikey`` query parameter.
    401/403 responses raise UpstreamAuthError; any other failure raises
    UpstreamUnavailable.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        fallback_on_auth_error: Optional[bool] = None,
    ):
        """
        Initialize the ATTOM client.

        Args:
            api_key: Override settings.attom_api_key
            base_url: Override the default API URL (for testing)
            session: Pre-configured requests session (for testing)
            timeout: Request timeout in seconds
            fallback_on_auth_error: Let 401/403 fall through to the next tier

        Raises:
            ConfigurationError: If no API key is configured
        """
        self.api_key = (api_key or settings.attom_api_key or "").strip()
        if not self.api_key:
            raise ConfigurationError("ATTOM_API_KEY is required for property sync")

        self.base_url = (base_url or settings.attom_base_url).rstrip("/")
        self.timeout = timeout or settings.http_timeout_seconds
        self.fallback_on_auth_error = (
            settings.attom_fallback_on_auth_error
            if fallback_on_auth_error is None
            else fallback_on_auth_error
        )
        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": "application/json",
            "User-Agent": settings.attom_user_agent,
        })
        self.sources: List[ForeclosureSource] = [
            ForeclosureSnapshotSource(self),
            BasicPropertySource(self),
            DemoDataSource(),
        ]
        logger.info("attom_client_initialized", base_url=self.base_url)

    def _redact(self, text: str) -> str:
        return text.replace(self.api_key, "API_KEY_HIDDEN")

    def request(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Perform a GET against the ATTOM API.

        Args:
            endpoint: Path below the base URL
            params: Query parameters; None values are dropped

        Returns:
            Decoded JSON payload

        Raises:
            UpstreamAuthError: On 401/403
            UpstreamUnavailable: On network errors or any other non-2xx status
        """
        query = {k: v for k, v in (params or {}).items() if v is not None}
        query["apikey"] = self.api_key
        url = f"{self.base_url}{endpoint}"

        prepared = requests.Request("GET", url, params=query).prepare()
        logger.info("attom_api_request", url=self._redact(prepared.url or url))

        try:
            response = self.session.get(url, params=query, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(
                "attom_api_request_failed",
                endpoint=endpoint,
                error=self._redact(str(e)),
                error_type=type(e).__name__,
            )
            raise UpstreamUnavailable(f"ATTOM request to {endpoint} failed: {type(e).__name__}") from e

        if response.status_code in (401, 403):
            logger.error(
                "attom_api_access_denied",
                endpoint=endpoint,
                status_code=response.status_code,
            )
            raise UpstreamAuthError(
                f"ATTOM API access issue: status {response.status_code}. "
                "Verify the API key and subscription.",
                status_code=response.status_code,
            )

        if not response.ok:
            logger.error(
                "attom_api_error",
                endpoint=endpoint,
                status_code=response.status_code,
                body=self._redact(response.text[:500]),
            )
            raise UpstreamUnavailable(
                f"ATTOM API error: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamUnavailable(f"ATTOM returned invalid JSON from {endpoint}") from e

    def fetch_foreclosure_properties(
        self,
        state: Optional[str] = None,
        city: Optional[str] = None,
        zip_code: Optional[str] = None,
        page: int = 1,
        page_size: int = 25,
    ) -> AttomResponse:
        """
        Fetch one page of foreclosure properties, degrading through the data tiers.

        Args:
            state: State code filter
            city: City filter
            zip_code: ZIP code filter
            page: 1-based page number
            page_size: Records per page

        Returns:
            AttomResponse from the first tier that succeeds

        Raises:
            UpstreamAuthError: On 401/403, unless fallback_on_auth_error is set
            UpstreamUnavailable: If every tier fails
        """
        params = {
            "state": state,
            "city": city,
            "postalcode": zip_code,
            "page": max(page, 1),
            "pagesize": page_size,
        }

        last_error: Optional[Exception] = None
        for source in self.sources:
            try:
                response = source.fetch(params)
            except UpstreamAuthError as e:
                if not self.fallback_on_auth_error:
                    raise
                last_error = e
            except UpstreamUnavailable as e:
                last_error = e
            else:
                logger.info(
                    "attom_tier_succeeded",
                    tier=source.name,
                    state=state,
                    page=params["page"],
                    records=len(response.property),
                )
                return response

            logger.warning(
                "attom_tier_unavailable",
                tier=source.name,
                state=state,
                error=str(last_error),
            )

        raise UpstreamUnavailable(f"All ATTOM data tiers failed: {last_error}")

    def search_properties(
        self,
        address: Optional[str] = None,
        city: Optional[str] = None,
        state: Optional[str] = None,
        zip_code: Optional[str] = None,
        radius: Optional[float] = None,
        page: int = 1,
        page_size: int = 25,
    ) -> AttomResponse:
        """Property search on the basic address endpoint (no fallback)."""
        payload = self.request(PROPERTY_ADDRESS_ENDPOINT, {
            "address": address,
            "city": city,
            "state": state,
            "postalcode": zip_code,
            "radius": radius,
            "page": page,
            "pagesize": page_size,
        })
        return AttomResponse.model_validate(payload)

    def get_property_detail(self, property_id: str) -> Optional[AttomProperty]:
        """
        Fetch a single property by ATTOM id.

        Returns:
            AttomProperty or None if ATTOM returns no match
        """
        payload = self.request(PROPERTY_DETAIL_ENDPOINT, {"id": property_id})
        response = AttomResponse.model_validate(payload)
        if response.property:
            return response.property[0]
        logger.warning("attom_property_not_found", property_id=property_id)
        return None


class ForeclosureSource:
    """One data tier. ``fetch`` raises UpstreamError subclasses to defer to the next tier."""

    name = "base"

    def fetch(self, params: Dict[str, Any]) -> AttomResponse:
        raise NotImplementedError

    def parse(self, payload: Dict[str, Any]) -> AttomResponse:
        try:
            return AttomResponse.model_validate(payload)
        except ValidationError as e:
            raise UpstreamUnavailable(f"{self.name} returned an unexpected payload: {e}") from e


class ForeclosureSnapshotSource(ForeclosureSource):
    """Tier 1: the foreclosure snapshot endpoint (needs a foreclosure subscription)."""

    name = "foreclosure_snapshot"

    def __init__(self, client: AttomClient):
        self.client = client

    def fetch(self, params: Dict[str, Any]) -> AttomResponse:
        return self.parse(self.client.request(FORECLOSURE_ENDPOINT, params))


class BasicPropertySource(ForeclosureSource):
    """Tier 2: basic property search plus synthetic foreclosure fields."""

    name = "basic_property"

    def __init__(self, client: AttomClient):
        self.client = client

    def fetch(self, params: Dict[str, Any]) -> AttomResponse:
        # Trial subscriptions cap the page size on this endpoint.
        limited = {**params, "pagesize": min(params["pagesize"], BASIC_TIER_MAX_PAGE_SIZE)}
        payload = self.client.request(PROPERTY_ADDRESS_ENDPOINT, limited)

        if not isinstance(payload, dict):
            raise UpstreamUnavailable(f"{self.name} returned an unexpected payload")
        records = payload.get("property") or []
        if not isinstance(records, list) or not all(isinstance(record, dict) for record in records):
            raise UpstreamUnavailable(f"{self.name} returned an unexpected property list")

        return self.parse(enhance_with_foreclosure(payload))


class DemoDataSource(ForeclosureSource):
    """Tier 3: curated demo listings. Never fails."""

    name = "demo_data"

    def fetch(self, params: Dict[str, Any]) -> AttomResponse:
        return AttomResponse.model_validate(
            build_demo_response(
                state=params.get("state"),
                city=params.get("city"),
                page=params["page"],
                page_size=params["pagesize"],
            )
        )
