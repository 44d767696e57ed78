"""
Cached StaticFiles per servire i documenti degli ordini con cache headers
"""
from fastapi.staticfiles import StaticFiles
from starlette.types import Receive, Scope, Send


class CachedStaticFiles(StaticFiles):
    """StaticFiles con cache headers; i documenti sono immutabili per path"""

    def __init__(self, *args, max_age: int = 86400, **kwargs):
        super().__init__(*args, **kwargs)
        self.max_age = max_age

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Override per aggiungere cache headers alle risposte"""

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                headers = dict(message.get("headers", []))
                headers[b"cache-control"] = f"private, max-age={self.max_age}".encode()
                message["headers"] = list(headers.items())

            await send(message)

        await super().__call__(scope, receive, send_wrapper)
