"""Helper utilities for tests."""

from datetime import datetime, timedelta, timezone
from urllib.parse import urlsplit


class FakeClock:
    """Deterministic clock advancing by a fixed step on every call."""

    def __init__(self, start=None, step=timedelta(seconds=1)):
        self.current = start or datetime(2024, 1, 1, tzinfo=timezone.utc)
        self.step = step

    def __call__(self):
        value = self.current
        self.current = self.current + self.step
        return value


class FlaskResponse:
    """Expose a Flask test response through the subset of the requests API the client uses."""

    def __init__(self, response):
        self._response = response
        self.status_code = response.status_code

    def json(self):
        data = self._response.get_json(silent=True)
        if data is None:
            raise ValueError("Response body is not JSON")
        return data


class FlaskSession:
    """Route ``LedgerClient`` requests into a Flask test client.

    Records every request so tests can assert nothing was sent.
    """

    def __init__(self, test_client):
        self._client = test_client
        self.calls = []

    def request(self, method, url, timeout=None, json=None):
        self.calls.append((method, url))
        kwargs = {} if json is None else {"json": json}
        response = self._client.open(urlsplit(url).path, method=method, **kwargs)
        return FlaskResponse(response)
