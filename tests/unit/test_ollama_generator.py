"""Unit tests for OllamaReportGenerator against a mocked Ollama HTTP API."""

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from grc_advisor.adapters.ollama_generator import OllamaReportGenerator
from grc_advisor.core.interfaces import GenerationFailedError, IReportTextGenerator
from grc_advisor.core.profile import Profile
from grc_advisor.core.risks import RiskPoolBuilder
from grc_advisor.core.scoring import MaturityScorer
from grc_advisor.settings import Settings

BASE_URL = "http://ollama.test"

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture()
def settings() -> Settings:
    return Settings(ollama_base_url=BASE_URL, ollama_model="llama3.1:8b", ollama_timeout_seconds=5.0)


def _generator(settings: Settings, handler: Handler) -> OllamaReportGenerator:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return OllamaReportGenerator(settings, client=client)


def _generate_reply(text: str) -> Handler:
    """Handler answering every /api/generate call with the given text."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"model": "llama3.1:8b", "response": text, "done": True})

    return handler


def _recording(text: str, captured: list[dict[str, Any]]) -> Handler:
    def handler(request: httpx.Request) -> httpx.Response:
        captured.append({"url": str(request.url), "body": json.loads(request.content)})
        return httpx.Response(200, json={"response": text})

    return handler


RECOMMENDATIONS_JSON = json.dumps(
    {
        "recommendations": [
            {
                "id": 1,
                "title": "Enforce phishing-resistant MFA",
                "category": "Technical",
                "priority": "Critical",
                "businessImpact": "Stops credential stuffing.",
                "steps": ["Step 1: Enable FIDO2", "Step 2: Enforce via conditional access"],
                "estimatedCost": {"min": 2000, "max": 8000},
                "timeline": "2 weeks",
                "resources": {"people": "IAM engineer", "tools": "Entra ID P1"},
                "successMetrics": ["100% of users enrolled"],
                "quickWins": ["Enforce MFA for admins today"],
            },
            {"title": "Deploy EDR"},
        ]
    }
)


class TestGenerateRequests:
    @pytest.mark.asyncio()
    async def test_summary_request_shape(self, settings: Settings, weak_profile: Profile) -> None:
        captured: list[dict[str, Any]] = []
        generator = _generator(settings, _recording("Board summary", captured))
        maturity = MaturityScorer().score(weak_profile)

        text = await generator.summarize(weak_profile, maturity)

        assert text == "Board summary"
        assert captured[0]["url"] == f"{BASE_URL}/api/generate"
        body = captured[0]["body"]
        assert body["model"] == "llama3.1:8b"
        assert body["stream"] is False
        assert body["options"] == {"temperature": 0.6, "top_p": 0.9, "num_predict": 1000}
        assert "format" not in body
        assert "Acme Ltd" in body["prompt"]
        assert "Standard Business Data" in body["prompt"]

    @pytest.mark.asyncio()
    async def test_roadmap_prompt_defaults(self, settings: Settings, weak_profile: Profile) -> None:
        captured: list[dict[str, Any]] = []
        generator = _generator(settings, _recording("# Roadmap", captured))

        assert await generator.roadmap(weak_profile) == "# Roadmap"

        body = captured[0]["body"]
        assert body["options"]["num_predict"] == 3000
        assert "Existing Certifications: None" in body["prompt"]
        assert "Regulatory Requirements: Not specified" in body["prompt"]

    @pytest.mark.asyncio()
    async def test_trailing_slash_in_base_url(self, weak_profile: Profile) -> None:
        captured: list[dict[str, Any]] = []
        settings = Settings(ollama_base_url=f"{BASE_URL}/")
        generator = _generator(settings, _recording("ok", captured))

        await generator.roadmap(weak_profile)

        assert captured[0]["url"] == f"{BASE_URL}/api/generate"


class TestStructuredOutput:
    @pytest.mark.asyncio()
    async def test_recommendations_are_parsed(self, settings: Settings, weak_profile: Profile) -> None:
        captured: list[dict[str, Any]] = []
        generator = _generator(settings, _recording(RECOMMENDATIONS_JSON, captured))
        maturity = MaturityScorer().score(weak_profile)

        recommendations = await generator.recommend(weak_profile, [], maturity)

        assert captured[0]["body"]["format"] == "json"
        assert captured[0]["body"]["options"]["temperature"] == 0.4
        first, second = recommendations
        assert first.business_impact == "Stops credential stuffing."
        assert (first.estimated_cost.min, first.estimated_cost.max) == (2000, 8000)
        assert first.resources.tools == "Entra ID P1"
        assert first.quick_wins == ["Enforce MFA for admins today"]
        assert second.id == 2
        assert second.priority == "Medium"

    @pytest.mark.asyncio()
    async def test_code_fenced_json_is_accepted(self, settings: Settings, weak_profile: Profile) -> None:
        fenced = f"```json\n{RECOMMENDATIONS_JSON}\n```"
        generator = _generator(settings, _generate_reply(fenced))
        maturity = MaturityScorer().score(weak_profile)

        recommendations = await generator.recommend(weak_profile, [], maturity)

        assert len(recommendations) == 2

    @pytest.mark.asyncio()
    async def test_quantification_object_form(self, settings: Settings, weak_profile: Profile) -> None:
        risks = RiskPoolBuilder().build(weak_profile)
        reply = json.dumps(
            {
                "risks": [
                    {
                        "risk": risks[0].risk,
                        "sle": 1500000,
                        "aro": 0.3,
                        "ale": 450000,
                        "mitigationCost": 60000,
                        "roi": 650,
                    }
                ]
            }
        )
        captured: list[dict[str, Any]] = []
        generator = _generator(settings, _recording(reply, captured))

        quantified = await generator.quantify(weak_profile, risks)

        assert quantified[0].risk == "Ransomware Attack with Data Loss"
        assert quantified[0].mitigation_cost == 60000
        assert quantified[0].ale == 450000
        prompt = captured[0]["body"]["prompt"]
        assert "Ransomware Attack with Data Loss: Doomsday impact, Almost Certain likelihood" in prompt

    @pytest.mark.asyncio()
    async def test_quantification_bare_list_form(self, settings: Settings, weak_profile: Profile) -> None:
        reply = json.dumps([{"risk": "Physical Security Breach", "sle": 20000, "aro": 0.1}])
        generator = _generator(settings, _generate_reply(reply))

        quantified = await generator.quantify(weak_profile, [])

        assert quantified[0].risk == "Physical Security Breach"
        assert quantified[0].roi == 0


class TestFailures:
    @pytest.mark.asyncio()
    async def test_server_error(self, settings: Settings, weak_profile: Profile) -> None:
        generator = _generator(settings, lambda request: httpx.Response(500, text="boom"))

        with pytest.raises(GenerationFailedError, match="500") as excinfo:
            await generator.roadmap(weak_profile)

        assert isinstance(excinfo.value.__cause__, httpx.HTTPStatusError)

    @pytest.mark.asyncio()
    async def test_timeout(self, settings: Settings, weak_profile: Profile) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        generator = _generator(settings, handler)

        with pytest.raises(GenerationFailedError, match="timed out") as excinfo:
            await generator.roadmap(weak_profile)

        assert isinstance(excinfo.value.__cause__, httpx.TimeoutException)

    @pytest.mark.asyncio()
    async def test_connection_refused(self, settings: Settings, weak_profile: Profile) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        generator = _generator(settings, handler)

        with pytest.raises(GenerationFailedError, match="Is Ollama running"):
            await generator.roadmap(weak_profile)

    @pytest.mark.asyncio()
    async def test_empty_response(self, settings: Settings, weak_profile: Profile) -> None:
        generator = _generator(settings, _generate_reply("   "))

        with pytest.raises(GenerationFailedError, match="Empty response"):
            await generator.roadmap(weak_profile)

    @pytest.mark.asyncio()
    async def test_non_json_envelope(self, settings: Settings, weak_profile: Profile) -> None:
        generator = _generator(settings, lambda request: httpx.Response(200, text="<html>proxy</html>"))

        with pytest.raises(GenerationFailedError):
            await generator.roadmap(weak_profile)

    @pytest.mark.asyncio()
    async def test_malformed_json_output(self, settings: Settings, weak_profile: Profile) -> None:
        generator = _generator(settings, _generate_reply("Here are your recommendations: ..."))
        maturity = MaturityScorer().score(weak_profile)

        with pytest.raises(GenerationFailedError, match="not valid JSON"):
            await generator.recommend(weak_profile, [], maturity)

    @pytest.mark.asyncio()
    async def test_schema_mismatch(self, settings: Settings, weak_profile: Profile) -> None:
        reply = json.dumps({"recommendations": [{"priority": "High"}]})
        generator = _generator(settings, _generate_reply(reply))
        maturity = MaturityScorer().score(weak_profile)

        with pytest.raises(GenerationFailedError, match="schema"):
            await generator.recommend(weak_profile, [], maturity)


class TestAvailability:
    @pytest.mark.asyncio()
    async def test_available_when_model_listed(self, settings: Settings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/tags"
            return httpx.Response(200, json={"models": [{"name": "llama3.1:8b"}, {"name": "mistral:7b"}]})

        assert await _generator(settings, handler).is_available() is True

    @pytest.mark.asyncio()
    async def test_unavailable_when_model_missing(self, settings: Settings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"models": [{"name": "mistral:7b"}]})

        assert await _generator(settings, handler).is_available() is False

    @pytest.mark.asyncio()
    async def test_unavailable_when_unreachable(self, settings: Settings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        assert await _generator(settings, handler).is_available() is False


class TestLifecycle:
    @pytest.mark.asyncio()
    async def test_satisfies_protocol(self, settings: Settings) -> None:
        async with OllamaReportGenerator(settings) as generator:
            assert isinstance(generator, IReportTextGenerator)

    @pytest.mark.asyncio()
    async def test_injected_client_is_not_closed(self, settings: Settings) -> None:
        client = httpx.AsyncClient(transport=httpx.MockTransport(_generate_reply("ok")))
        async with OllamaReportGenerator(settings, client=client):
            pass
        assert not client.is_closed
        await client.aclose()

    @pytest.mark.asyncio()
    async def test_owned_client_is_closed(self, settings: Settings) -> None:
        generator = OllamaReportGenerator(settings)
        await generator.aclose()
        assert generator._client.is_closed
