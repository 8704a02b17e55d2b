import httpx
import pytest

from llm.llm_client import LLMClient
from project_planner.errors import GeneratorError, GeneratorUnavailable

def test_complete_returns_raw_text(fake_provider_factory):
    provider = fake_provider_factory(
        '{"tasks":[{"name":"Send invoice","category":"Billing"}],"categories":["Billing"]}'
    )
    client = LLMClient(provider=provider)
    out = client.complete("Send invoice")
    assert out.startswith('{"tasks"')
    assert provider.calls == ["Send invoice"]

def test_unconfigured_client_raises():
    client = LLMClient(provider=None)
    assert not client.configured
    with pytest.raises(GeneratorUnavailable):
        client.complete("anything")

def test_transport_error_becomes_generator_error():
    class DownProvider:
        def generate(self, *, system: str, user: str) -> str:
            raise httpx.ConnectError("connection refused")

    client = LLMClient(provider=DownProvider())
    with pytest.raises(GeneratorError):
        client.complete("anything")

def test_non_text_output_is_generator_error():
    class WeirdProvider:
        def generate(self, *, system: str, user: str):
            return {"tasks": []}

    with pytest.raises(GeneratorError):
        LLMClient(provider=WeirdProvider()).complete("anything")
