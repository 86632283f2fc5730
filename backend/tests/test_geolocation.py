import pytest
import requests
from unittest.mock import MagicMock

from backend.modules.garden.geolocation import GeoLocator, is_public_ip

PUBLIC_IP = "8.8.8.8"


def _session(status=200, payload=None, error=None):
    session = MagicMock()
    if error is not None:
        session.get.side_effect = error
    else:
        session.get.return_value = MagicMock(status_code=status, json=MagicMock(return_value=payload))
    return session


def _locator(session):
    return GeoLocator(url_template="https://geo.test/{ip}/json/", timeout=3.0, enabled=True, session=session)


@pytest.mark.parametrize("ip,expected", [
    ("8.8.8.8", True),
    ("127.0.0.1", False),
    ("10.0.0.7", False),
    ("192.168.1.20", False),
    ("::1", False),
    ("not-an-ip", False),
    (None, False),
])
def test_is_public_ip(ip, expected):
    assert is_public_ip(ip) is expected


def test_lookup_success():
    session = _session(payload={"latitude": 37.42, "longitude": -122.08,
                                "country_name": "United States", "city": "Mountain View"})

    geo = _locator(session).lookup(PUBLIC_IP)

    assert geo.latitude == pytest.approx(37.42)
    assert geo.longitude == pytest.approx(-122.08)
    assert geo.country == "United States"
    assert geo.city == "Mountain View"
    session.get.assert_called_once_with("https://geo.test/8.8.8.8/json/", timeout=3.0)


def test_private_ip_skips_request():
    session = _session(payload={})

    assert _locator(session).lookup("127.0.0.1") is None
    session.get.assert_not_called()


def test_disabled_locator_skips_request():
    session = _session(payload={})
    locator = GeoLocator(enabled=False, session=session)

    assert locator.lookup(PUBLIC_IP) is None
    session.get.assert_not_called()


@pytest.mark.parametrize("session", [
    _session(error=requests.ConnectionError("down")),
    _session(error=requests.Timeout("slow")),
    _session(status=429, payload={}),
    _session(payload={"error": True, "reason": "RateLimited"}),
    _session(payload={"city": "Nowhere"}),
    _session(payload={"latitude": 123.0, "longitude": 0.0}),
    _session(payload=["not", "a", "dict"]),
])
def test_lookup_failures_return_none(session):
    assert _locator(session).lookup(PUBLIC_IP) is None


def test_bad_json_returns_none():
    session = MagicMock()
    session.get.return_value = MagicMock(status_code=200, json=MagicMock(side_effect=ValueError("bad json")))

    assert _locator(session).lookup(PUBLIC_IP) is None
