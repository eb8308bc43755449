"""
Property Image Enricher

Attaches Street View imagery to synced properties. Every property gets a
front view; high-opportunity properties (score 4+) also get east, south and
west views.
"""
from typing import List, Optional

from src.subasta.enrichment.street_view import (
    DEFAULT_FOV,
    DEFAULT_PITCH,
    StreetViewClient,
    direction_caption,
)
from src.subasta.models.property import PropertyImage
from src.subasta.utils.logger import get_logger

logger = get_logger(__name__)

FRONT_CAPTION = "Vista desde la calle"
UNAVAILABLE_CAPTION = "Imagen no disponible"
EXTRA_HEADINGS = [90, 180, 270]
MULTI_ANGLE_MIN_SCORE = 4


class PropertyImageEnricher:
    """Builds the image list stored with each synced property."""

    def __init__(self, street_view: Optional[StreetViewClient] = None):
        self.street_view = street_view or StreetViewClient()

    def _image(self, address: str, heading: int, caption: str) -> PropertyImage:
        url = self.street_view.street_view_url(
            address, heading=heading, pitch=DEFAULT_PITCH, fov=DEFAULT_FOV
        )
        image_type = "street_view" if self.street_view.has_api_key else "placeholder"
        return PropertyImage(url=url, type=image_type, caption=caption, heading=heading)

    def placeholder(self) -> List[PropertyImage]:
        return [
            PropertyImage(
                url=self.street_view.placeholder_url,
                type="placeholder",
                caption=UNAVAILABLE_CAPTION,
            )
        ]

    def enrich(self, address: str, opportunity_score: Optional[int]) -> List[PropertyImage]:
        """
        Image descriptors for one property.

        Args:
            address: Full one-line address (street, city, state)
            opportunity_score: 1-5 score; 4 or more adds three extra angles

        Returns:
            At least one image. Never raises.
        """
        try:
            images = [self._image(address, 0, FRONT_CAPTION)]
            if (opportunity_score or 0) >= MULTI_ANGLE_MIN_SCORE:
                for heading in EXTRA_HEADINGS:
                    images.append(self._image(address, heading, direction_caption(heading)))
            return images
        except Exception as e:
            logger.warning(
                "property_image_generation_failed",
                address=address,
                error=str(e),
                error_type=type(e).__name__,
            )
            return self.placeholder()
