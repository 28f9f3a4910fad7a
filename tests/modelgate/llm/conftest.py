import json
import sys
import types
from typing import Any, Optional

import pytest


class FakeSDKError(Exception):
    """Stands in for an SDK's APIStatusError."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: str = ""):
        self.status_code = status_code
        self._payload = payload
        self.text = text or (json.dumps(payload) if payload is not None else "")

    def json(self):
        if self._payload is None:
            raise ValueError("no JSON body")
        return self._payload


class FakeSession:
    """Records requests and replays queued responses per (method, url)."""

    def __init__(self):
        self.calls: list[tuple[str, str, dict]] = []
        self._routes: dict[tuple[str, str], list] = {}

    def add(self, method: str, url: str, response) -> None:
        self._routes.setdefault((method, url), []).append(response)

    def _dispatch(self, method: str, url: str, **kwargs):
        self.calls.append((method, url, kwargs))
        queue = self._routes.get((method, url))
        if not queue:
            raise AssertionError(f"unexpected {method.upper()} {url}")
        response = queue[0] if len(queue) == 1 else queue.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def get(self, url, **kwargs):
        return self._dispatch("get", url, **kwargs)

    def post(self, url, **kwargs):
        return self._dispatch("post", url, **kwargs)

    def urls(self) -> list[str]:
        return [url for _, url, _ in self.calls]


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def fake_sdk_error():
    return FakeSDKError


def _obj(**kwargs):
    return types.SimpleNamespace(**kwargs)


@pytest.fixture
def stub_openai(monkeypatch):
    """Install a minimal `openai` module; returns a handle to inspect calls."""

    state = types.SimpleNamespace(
        init_kwargs=None, calls=[], output_text='{"answer": "4"}', error=None
    )

    class _Responses:
        def create(self, **kwargs):
            state.calls.append(kwargs)
            if state.error is not None:
                raise state.error
            return _obj(output_text=state.output_text, output=[])

    class OpenAI:
        def __init__(self, **kwargs):
            state.init_kwargs = kwargs
            self.responses = _Responses()

    mod = types.ModuleType("openai")
    mod.OpenAI = OpenAI  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "openai", mod)
    return state


@pytest.fixture
def stub_anthropic(monkeypatch):
    state = types.SimpleNamespace(
        init_kwargs=None,
        calls=[],
        content=[_obj(type="tool_use", input={"answer": "Paris"})],
    )

    class _Messages:
        def create(self, **kwargs):
            state.calls.append(kwargs)
            return _obj(content=state.content)

    class Anthropic:
        def __init__(self, **kwargs):
            state.init_kwargs = kwargs
            self.messages = _Messages()

    mod = types.ModuleType("anthropic")
    mod.Anthropic = Anthropic  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "anthropic", mod)
    return state


@pytest.fixture
def stub_genai(monkeypatch):
    state = types.SimpleNamespace(
        init_kwargs=None, calls=[], text='{"answer": "Paris"}'
    )

    class _Models:
        def generate_content(self, **kwargs):
            state.calls.append(kwargs)
            return _obj(text=state.text)

    class Client:
        def __init__(self, **kwargs):
            state.init_kwargs = kwargs
            self.models = _Models()

    genai_types = types.ModuleType("google.genai.types")
    genai_types.HttpOptions = lambda **kw: dict(kw)  # type: ignore[attr-defined]
    genai_types.GenerateContentConfig = lambda **kw: dict(kw)  # type: ignore[attr-defined]

    genai = types.ModuleType("google.genai")
    genai.Client = Client  # type: ignore[attr-defined]
    genai.types = genai_types  # type: ignore[attr-defined]

    google = types.ModuleType("google")
    google.genai = genai  # type: ignore[attr-defined]

    monkeypatch.setitem(sys.modules, "google", google)
    monkeypatch.setitem(sys.modules, "google.genai", genai)
    monkeypatch.setitem(sys.modules, "google.genai.types", genai_types)
    return state


@pytest.fixture
def answer_schema():
    from modelgate.llm.schema import object_schema

    return object_schema({"answer": {"type": "string"}})


@pytest.fixture
def sap_credentials():
    from modelgate.config import SapCredentials

    return SapCredentials(
        client_id="cid",
        client_secret="secret",
        token_url="https://auth.example.com/oauth/token",
        base_url="https://api.ai.example.com",
        resource_group="rg-1",
    )
