import httpx

BASE_URL = "http://api.test/api/v1"
LEGACY_BASE_URL = "http://api.test/api"


class Recorder:
    """MockTransport handler that records requests and answers from a route table."""

    def __init__(self, routes=None):
        self.routes = routes or {}
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, json={"error": {"code": "NOT_FOUND", "message": "Not found"}})
        answer = self.routes[key]
        if callable(answer):
            return answer(request)
        status, body = answer
        return httpx.Response(status, json=body)

    def paths(self):
        return [(r.method, r.url.path) for r in self.requests]
