import pytest

from inverse_mod import client
from inverse_mod.client import DEFAULT_ENDPOINT, fetch_outcome
from inverse_mod.config import Mode
from inverse_mod.errors import RemoteError


class FakeResponse:
    def __init__(self, status_code: int, payload=None, text: str = ""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        return self._payload


@pytest.fixture
def calls(monkeypatch):
    """Record requests.get calls and answer with a canned outcome"""
    recorded = []

    def fake_get(url, params=None, timeout=None):
        recorded.append((url, params, timeout))
        return FakeResponse(200, {"result": "Inverse of 3 mod 7 = 5", "inverse": 5})

    monkeypatch.setattr(client.requests, "get", fake_get)
    return recorded


class TestFetchOutcome:
    """Test suite for fetch_outcome"""

    def test_result_route(self, calls) -> None:
        data = fetch_outcome(3, 7)
        assert data["inverse"] == 5
        assert calls == [(f"{DEFAULT_ENDPOINT}/inverse-mod-z", {"x": 3, "y": 7, "mode": "guaranteed"}, 10)]

    def test_steps_route(self, calls) -> None:
        """Test the steps flag, mode strings and trailing slashes on the endpoint"""
        fetch_outcome(3, 7, "heuristicOnly", "http://example.test/api/", steps=True, timeout=2)
        assert calls == [("http://example.test/api/inverse-mod", {"x": 3, "y": 7, "mode": "heuristicOnly"}, 2)]

    def test_mode_enum(self, calls) -> None:
        fetch_outcome(3, 7, Mode.HEURISTIC_ONLY)
        assert calls[0][1]["mode"] == "heuristicOnly"

    def test_error_status(self, monkeypatch) -> None:
        """Test a non-200 answer raises RemoteError"""
        monkeypatch.setattr(client.requests, "get", lambda url, params=None, timeout=None: FakeResponse(500, text="boom"))
        with pytest.raises(RemoteError, match="500 boom"):
            fetch_outcome(3, 7)

    def test_unknown_mode(self, calls) -> None:
        with pytest.raises(ValueError):
            fetch_outcome(3, 7, "bogus")
        assert calls == []
