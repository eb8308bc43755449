"""
Google Street View Client

Builds Street View and Static Maps image URLs for property addresses. The
API key is optional; without it every URL is the local placeholder.
"""
from typing import List, Optional
from urllib.parse import urlencode

import requests

from config.settings import settings
from src.subasta.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_SIZE = "640x400"
DEFAULT_PITCH = -10
DEFAULT_FOV = 75


def direction_caption(heading: int) -> str:
    """Spanish caption for a compass heading in degrees."""
    heading = heading % 360
    if heading >= 315 or heading < 45:
        return "Vista Norte"
    if heading < 135:
        return "Vista Este"
    if heading < 225:
        return "Vista Sur"
    return "Vista Oeste"


class StreetViewClient:
    """URL builder and availability check for Google Street View imagery."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.google_maps_api_key
        self.base_url = base_url or settings.street_view_base_url
        self.placeholder_url = settings.placeholder_image_url
        self.session = session or requests.Session()

        if not self.api_key:
            logger.warning("google_maps_api_key_missing", fallback="placeholder_images")

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    def street_view_url(
        self,
        address: str,
        size: str = DEFAULT_SIZE,
        heading: Optional[int] = None,
        pitch: Optional[int] = None,
        fov: Optional[int] = None,
    ) -> str:
        """
        Street View image URL for an address.

        Args:
            address: One-line address
            size: WIDTHxHEIGHT in pixels
            heading: Camera heading in degrees
            pitch: Camera pitch in degrees
            fov: Field of view in degrees

        Returns:
            Image URL, or the placeholder path when no key is configured
        """
        if not self.api_key:
            return self.placeholder_url

        params = {"location": address, "size": size, "key": self.api_key}
        if heading is not None:
            params["heading"] = heading
        if pitch is not None:
            params["pitch"] = pitch
        if fov is not None:
            params["fov"] = fov

        return f"{self.base_url}?{urlencode(params)}"

    def multiple_angles(self, address: str, angles: Optional[List[int]] = None) -> List[dict]:
        """Street View URLs for several headings, each with its caption."""
        images = []
        for heading in angles or [0, 90, 180, 270]:
            images.append({
                "url": self.street_view_url(
                    address, heading=heading, pitch=DEFAULT_PITCH, fov=DEFAULT_FOV
                ),
                "heading": heading,
                "caption": direction_caption(heading),
            })
        return images

    def aerial_view_url(self, address: str) -> str:
        """Satellite view from Google Static Maps."""
        if not self.api_key:
            return self.placeholder_url

        params = {
            "center": address,
            "zoom": 18,
            "size": DEFAULT_SIZE,
            "maptype": "satellite",
            "key": self.api_key,
        }
        return f"{settings.static_map_base_url}?{urlencode(params)}"

    def is_street_view_available(self, address: str) -> bool:
        """
        Ask the Street View metadata endpoint whether imagery exists.

        Returns:
            False without an API key or when the metadata request fails
        """
        if not self.api_key:
            return False

        try:
            response = self.session.get(
                f"{self.base_url}/metadata",
                params={"location": address, "key": self.api_key},
                timeout=settings.http_timeout_seconds,
            )
            response.raise_for_status()
            return response.json().get("status") == "OK"
        except (requests.RequestException, ValueError) as e:
            logger.warning(
                "street_view_metadata_failed",
                error=str(e).replace(self.api_key, "API_KEY_HIDDEN"),
                error_type=type(e).__name__,
            )
            return False
