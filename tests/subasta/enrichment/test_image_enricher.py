"""
Tests for Street View URLs and property image enrichment
"""
from unittest.mock import MagicMock, Mock
from urllib.parse import parse_qs, urlparse

import pytest
import requests

from config.settings import settings
from src.subasta.enrichment.image_enricher import PropertyImageEnricher
from src.subasta.enrichment.street_view import StreetViewClient, direction_caption

ADDRESS = "1245 Ocean Drive, Miami Beach, FL"


@pytest.fixture
def street_view():
    return StreetViewClient(api_key="maps-key", session=MagicMock())


@pytest.fixture
def keyless():
    return StreetViewClient(api_key="", session=MagicMock())


class TestStreetViewClient:
    """Tests for StreetViewClient."""

    def test_street_view_url(self, street_view):
        url = street_view.street_view_url(ADDRESS, heading=90, pitch=-10, fov=75)

        parsed = urlparse(url)
        query = parse_qs(parsed.query)
        assert url.startswith(settings.street_view_base_url)
        assert query["location"] == [ADDRESS]
        assert query["size"] == ["640x400"]
        assert query["heading"] == ["90"]
        assert query["pitch"] == ["-10"]
        assert query["fov"] == ["75"]
        assert query["key"] == ["maps-key"]

    def test_optional_params_omitted(self, street_view):
        query = parse_qs(urlparse(street_view.street_view_url(ADDRESS)).query)
        assert "heading" not in query
        assert "pitch" not in query

    def test_placeholder_without_key(self, keyless):
        assert keyless.street_view_url(ADDRESS) == settings.placeholder_image_url
        assert keyless.aerial_view_url(ADDRESS) == settings.placeholder_image_url
        assert keyless.has_api_key is False

    def test_multiple_angles(self, street_view):
        images = street_view.multiple_angles(ADDRESS)

        assert [image["heading"] for image in images] == [0, 90, 180, 270]
        assert [image["caption"] for image in images] == ["Vista Norte", "Vista Este", "Vista Sur", "Vista Oeste"]

    def test_aerial_view_url(self, street_view):
        url = street_view.aerial_view_url(ADDRESS)
        query = parse_qs(urlparse(url).query)

        assert url.startswith(settings.static_map_base_url)
        assert query["maptype"] == ["satellite"]
        assert query["zoom"] == ["18"]

    def test_is_street_view_available(self, street_view):
        response = Mock()
        response.json.return_value = {"status": "OK"}
        street_view.session.get.return_value = response

        assert street_view.is_street_view_available(ADDRESS) is True
        args, kwargs = street_view.session.get.call_args
        assert args[0].endswith("/metadata")
        assert kwargs["timeout"] == settings.http_timeout_seconds

    def test_is_street_view_unavailable(self, street_view):
        response = Mock()
        response.json.return_value = {"status": "ZERO_RESULTS"}
        street_view.session.get.return_value = response

        assert street_view.is_street_view_available(ADDRESS) is False

    def test_is_street_view_available_request_error(self, street_view):
        street_view.session.get.side_effect = requests.ConnectionError("down")
        assert street_view.is_street_view_available(ADDRESS) is False

    def test_is_street_view_available_without_key(self, keyless):
        assert keyless.is_street_view_available(ADDRESS) is False
        keyless.session.get.assert_not_called()


@pytest.mark.parametrize(
    "heading, caption",
    [(0, "Vista Norte"), (90, "Vista Este"), (180, "Vista Sur"), (270, "Vista Oeste"), (360, "Vista Norte")],
)
def test_direction_caption(heading, caption):
    assert direction_caption(heading) == caption


class TestPropertyImageEnricher:
    """Tests for PropertyImageEnricher."""

    @pytest.mark.parametrize("score", [None, 1, 2, 3])
    def test_front_view_only_below_four(self, street_view, score):
        images = PropertyImageEnricher(street_view).enrich(ADDRESS, score)

        assert len(images) == 1
        assert images[0].caption == "Vista desde la calle"
        assert images[0].heading == 0
        assert images[0].type == "street_view"
        assert "heading=0" in images[0].url

    @pytest.mark.parametrize("score", [4, 5])
    def test_extra_angles_from_four(self, street_view, score):
        images = PropertyImageEnricher(street_view).enrich(ADDRESS, score)

        assert [image.heading for image in images] == [0, 90, 180, 270]
        assert [image.caption for image in images] == [
            "Vista desde la calle",
            "Vista Este",
            "Vista Sur",
            "Vista Oeste",
        ]

    def test_without_key_uses_placeholders(self, keyless):
        images = PropertyImageEnricher(keyless).enrich(ADDRESS, 5)

        assert len(images) == 4
        assert all(image.type == "placeholder" for image in images)
        assert all(image.url == settings.placeholder_image_url for image in images)

    def test_failure_returns_single_placeholder(self, street_view):
        street_view.street_view_url = Mock(side_effect=RuntimeError("quota"))

        images = PropertyImageEnricher(street_view).enrich(ADDRESS, 5)

        assert len(images) == 1
        assert images[0].type == "placeholder"
        assert images[0].caption == "Imagen no disponible"
        assert images[0].url == settings.placeholder_image_url
