"""Ollama-backed implementation of IReportTextGenerator.

Talks to a local Ollama server over its HTTP API (``/api/generate`` for
completions, ``/api/tags`` for model discovery). Free-text sections are
returned as-is; structured sections are requested in Ollama's JSON mode and
validated against pydantic payload models before being converted to the
core dataclasses.

Every failure (transport error, timeout, error status, empty output, invalid
JSON, schema mismatch) surfaces as GenerationFailedError with the original
exception chained.
"""

import json
import re
import time
from types import TracebackType
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from grc_advisor.adapters.prompts import (
    GenerationRequest,
    build_quantification_request,
    build_recommendations_request,
    build_roadmap_request,
    build_summary_request,
)
from grc_advisor.core.interfaces import GenerationFailedError
from grc_advisor.core.models import (
    CostRange,
    Gap,
    MaturityResult,
    QuantifiedRisk,
    Recommendation,
    ResourceNeeds,
    RiskRecord,
)
from grc_advisor.core.profile import Profile
from grc_advisor.observability import get_logger
from grc_advisor.settings import Settings

logger = get_logger(__name__)

_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$")


class _Payload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class CostRangePayload(_Payload):
    min: float = 0.0
    max: float = 0.0


class ResourcesPayload(_Payload):
    people: str = ""
    tools: str = ""


class RecommendationPayload(_Payload):
    """One recommendation as emitted by the model."""

    id: int | None = None
    title: str
    category: str = "Technical"
    priority: str = "Medium"
    business_impact: str = ""
    steps: list[str] = Field(default_factory=list)
    estimated_cost: CostRangePayload = Field(default_factory=CostRangePayload)
    timeline: str = ""
    resources: ResourcesPayload = Field(default_factory=ResourcesPayload)
    success_metrics: list[str] = Field(default_factory=list)
    quick_wins: list[str] = Field(default_factory=list)

    def to_recommendation(self, position: int) -> Recommendation:
        return Recommendation(
            id=self.id if self.id is not None else position,
            title=self.title,
            category=self.category,
            priority=self.priority,
            business_impact=self.business_impact,
            steps=list(self.steps),
            estimated_cost=CostRange(min=self.estimated_cost.min, max=self.estimated_cost.max),
            timeline=self.timeline,
            resources=ResourceNeeds(people=self.resources.people, tools=self.resources.tools),
            success_metrics=list(self.success_metrics),
            quick_wins=list(self.quick_wins),
        )


class RecommendationsPayload(_Payload):
    recommendations: list[RecommendationPayload]


class QuantifiedRiskPayload(_Payload):
    """Loss estimate for one risk as emitted by the model."""

    risk: str
    sle: float = 0.0
    aro: float = 0.0
    ale: float = 0.0
    mitigation_cost: float = 0.0
    roi: float = 0.0

    def to_quantified_risk(self) -> QuantifiedRisk:
        return QuantifiedRisk(
            risk=self.risk,
            sle=self.sle,
            aro=self.aro,
            ale=self.ale,
            mitigation_cost=self.mitigation_cost,
            roi=self.roi,
        )


class QuantificationPayload(_Payload):
    risks: list[QuantifiedRiskPayload]


class OllamaReportGenerator:
    """Report text generation through a local Ollama server.

    Args:
        settings: Service settings supplying base URL, model, timeout and top_p.
        client: Optional pre-built httpx.AsyncClient. When omitted the
            generator creates and owns its own client; an injected client is
            never closed by the generator.
    """

    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None) -> None:
        self._settings = settings
        self._base_url = settings.ollama_base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=settings.ollama_timeout_seconds)

    @property
    def model(self) -> str:
        return self._settings.ollama_model

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this generator created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "OllamaReportGenerator":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def summarize(self, profile: Profile, maturity: MaturityResult) -> str:
        return await self._generate("executive_summary", build_summary_request(profile, maturity))

    async def recommend(
        self,
        profile: Profile,
        gaps: list[Gap],
        maturity: MaturityResult,
    ) -> list[Recommendation]:
        """Generate recommendations and validate them against the expected schema."""
        text = await self._generate(
            "recommendations", build_recommendations_request(profile, gaps, maturity)
        )
        document = self._parse_json(text)
        try:
            payload = RecommendationsPayload.model_validate(document)
        except ValidationError as exc:
            raise GenerationFailedError("Recommendations output does not match the schema") from exc
        return [
            item.to_recommendation(position)
            for position, item in enumerate(payload.recommendations, start=1)
        ]

    async def roadmap(self, profile: Profile) -> str:
        return await self._generate("compliance_roadmap", build_roadmap_request(profile))

    async def quantify(
        self,
        profile: Profile,
        risks: list[RiskRecord],
    ) -> list[QuantifiedRisk]:
        """Generate loss estimates per risk.

        Accepts either ``{"risks": [...]}`` or a bare JSON array.
        """
        text = await self._generate(
            "quantified_risks", build_quantification_request(profile, risks)
        )
        document = self._parse_json(text)
        if isinstance(document, list):
            document = {"risks": document}
        try:
            payload = QuantificationPayload.model_validate(document)
        except ValidationError as exc:
            raise GenerationFailedError("Quantification output does not match the schema") from exc
        return [item.to_quantified_risk() for item in payload.risks]

    async def is_available(self) -> bool:
        """Return True if the server answers and lists the configured model."""
        try:
            response = await self._client.get(f"{self._base_url}/api/tags")
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.debug("Ollama status check failed", error=str(exc))
            return False

        models = data.get("models") if isinstance(data, dict) else None
        if not isinstance(models, list):
            return False
        return any(
            self.model in str(entry.get("name", "")) for entry in models if isinstance(entry, dict)
        )

    async def _generate(self, task: str, request: GenerationRequest) -> str:
        """POST one prompt to /api/generate and return the response text.

        Args:
            task: Section name for logging.
            request: Prompt and sampling settings.

        Returns:
            Non-empty generated text.

        Raises:
            GenerationFailedError: On any transport, status or content failure.
        """
        body: dict[str, Any] = {
            "model": self.model,
            "prompt": request.prompt,
            "stream": False,
            "options": {
                "temperature": request.temperature,
                "top_p": self._settings.ollama_top_p,
                "num_predict": request.max_tokens,
            },
        }
        if request.json_output:
            body["format"] = "json"

        started = time.monotonic()
        try:
            response = await self._client.post(
                f"{self._base_url}/api/generate",
                json=body,
                timeout=self._settings.ollama_timeout_seconds,
            )
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as exc:
            raise GenerationFailedError(
                f"AI generation timed out after {self._settings.ollama_timeout_seconds}s; "
                "the model may be loading or busy"
            ) from exc
        except httpx.HTTPStatusError as exc:
            raise GenerationFailedError(
                f"Ollama API error: {exc.response.status_code} {exc.response.reason_phrase}"
            ) from exc
        except httpx.HTTPError as exc:
            raise GenerationFailedError(f"AI generation failed: {exc}. Is Ollama running?") from exc
        except ValueError as exc:
            raise GenerationFailedError("Ollama returned a response that is not JSON") from exc

        text = data.get("response") if isinstance(data, dict) else None
        if not isinstance(text, str) or not text.strip():
            raise GenerationFailedError("Empty response from Ollama")

        logger.info(
            "Ollama generation complete",
            task=task,
            model=self.model,
            duration_ms=round((time.monotonic() - started) * 1000),
            characters=len(text),
        )
        return text

    def _parse_json(self, text: str) -> Any:
        cleaned = _CODE_FENCE.sub("", text.strip())
        try:
            return json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise GenerationFailedError("Model output is not valid JSON") from exc
