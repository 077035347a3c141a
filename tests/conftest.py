import json


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """Stand-in for requests.Session: records calls, replays one response (or raises)."""

    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        if self.exc is not None:
            raise self.exc
        return self.response


def daily_document(n, start_day=1):
    """n daily entries, newest first, like the upstream service returns them."""
    days = [f"2024-01-{d:02d}" for d in range(start_day, start_day + n)]
    series = {ds: {"1. open": "1.0", "4. close": f"{100 + i}.5"} for i, ds in enumerate(days)}
    return {"Meta Data": {}, "Time Series (Daily)": dict(reversed(list(series.items())))}


def deeply_nested_response(depth=100000):
    """Real requests.Response whose JSON body nests deeper than the parser allows."""
    import requests

    r = requests.Response()
    r.status_code = 200
    r._content = b"[" * depth + b"]" * depth
    return r
