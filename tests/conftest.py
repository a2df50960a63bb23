import pytest
from fastapi.testclient import TestClient

from chat_proxy.config import Settings
from chat_proxy.main import create_app
from chat_proxy.services.upstream import UpstreamAdapter

CLIENT_KEY = "3654c0c8-test-client-key"
AUTH = {"Authorization": f"Bearer {CLIENT_KEY}"}


class FakeUpstream(UpstreamAdapter):
    """Records every call instead of talking to a provider."""

    endpoint_url = "https://upstream.test/v1/chat/completions"

    def __init__(self, content="Hi there", error=None):
        self.content = content
        self.error = error
        self.calls = []

    def complete(self, messages, model, params):
        self.calls.append({"messages": messages, "model": model, "params": params})
        if self.error is not None:
            raise self.error
        return self.content


@pytest.fixture
def settings():
    return Settings(
        client_api_key=CLIENT_KEY,
        upstream_api_key="sk-upstream",
        model_id="test-model",
        system_prompt="You are a test assistant.",
    )


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def client(settings, upstream):
    return TestClient(create_app(settings, upstream=upstream))
