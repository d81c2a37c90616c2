"""In-memory fakes for the Slack, OpenAI and HTTP collaborators."""

from types import SimpleNamespace
from typing import Any, Dict, List, Optional


class FakeSlackClient:
    """Records every Web API call; optionally raises from a named method."""

    def __init__(self, messages: Optional[List[Dict[str, Any]]] = None, fail_on: Optional[str] = None):
        self.messages = messages or []
        self.fail_on = fail_on
        self.calls: List[tuple] = []

    def _record(self, method: str, kwargs: Dict[str, Any]) -> None:
        self.calls.append((method, kwargs))
        if self.fail_on == method:
            raise RuntimeError(f"{method} failed")

    def conversations_replies(self, **kwargs):
        self._record("conversations_replies", kwargs)
        return {"ok": True, "messages": list(self.messages)}

    def chat_postMessage(self, **kwargs):
        self._record("chat_postMessage", kwargs)
        return {"ok": True}

    def files_upload_v2(self, **kwargs):
        self._record("files_upload_v2", kwargs)
        return {"ok": True}

    def calls_to(self, method: str) -> List[Dict[str, Any]]:
        return [kwargs for name, kwargs in self.calls if name == method]


class _FakeCompletions:
    def __init__(self, owner: "FakeOpenAI"):
        self.owner = owner

    def create(self, **kwargs):
        self.owner.chat_requests.append(kwargs)
        if self.owner.chat_error is not None:
            raise self.owner.chat_error
        message = SimpleNamespace(content=self.owner.reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class _FakeImages:
    def __init__(self, owner: "FakeOpenAI"):
        self.owner = owner

    def generate(self, **kwargs):
        self.owner.image_requests.append(kwargs)
        if self.owner.image_error is not None:
            raise self.owner.image_error
        return SimpleNamespace(data=[SimpleNamespace(url=self.owner.image_url)])


class FakeOpenAI:
    """Mimics the `chat.completions.create` and `images.generate` surface of OpenAI."""

    def __init__(
        self,
        reply: Optional[str] = "Hi there!",
        image_url: str = "https://images.example.com/fox.png",
        chat_error: Optional[Exception] = None,
        image_error: Optional[Exception] = None,
    ):
        self.reply = reply
        self.image_url = image_url
        self.chat_error = chat_error
        self.image_error = image_error
        self.chat_requests: List[Dict[str, Any]] = []
        self.image_requests: List[Dict[str, Any]] = []
        self.chat = SimpleNamespace(completions=_FakeCompletions(self))
        self.images = _FakeImages(self)


class FakeHttpResponse:
    def __init__(self, content: bytes, status_code: int = 200):
        self.content = content
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise RuntimeError(f"HTTP {self.status_code}")


class FakeHttpSession:
    def __init__(self, content: bytes = b"\x89PNG fake", status_code: int = 200):
        self.content = content
        self.status_code = status_code
        self.requested: List[str] = []

    def get(self, url: str, **kwargs) -> FakeHttpResponse:
        self.requested.append(url)
        return FakeHttpResponse(self.content, self.status_code)
