"""Tests for the Gemini analysis client using a mocked transport."""

import json

import httpx
import pytest
from pydantic import SecretStr

from genoai.analysis.collaborator import (
    AnalysisFailedError,
    AnalysisNotConfiguredError,
    CRISPR_FAILURE_MESSAGE,
    MUTATION_FAILURE_MESSAGE,
)
from genoai.analysis.gemini import (
    GeminiAnalysisClient,
    build_crispr_prompt,
    build_mutation_prompt,
)
from genoai.config import AnalysisServiceConfig
from genoai.design.pam_scanner import scan_for_candidates
from genoai.models.enums import Classification, ClinicalSignificance, RiskLevel

from tests.conftest import TEST_SEQUENCES, crispr_payload, mutation_payload


def gemini_response(payload) -> dict:
    """Envelope the generateContent API wraps JSON text in."""
    return {
        "candidates": [
            {"content": {"role": "model", "parts": [{"text": json.dumps(payload)}]}}
        ]
    }


def make_client(handler, requests=None) -> GeminiAnalysisClient:
    def recording_handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        return handler(request)

    transport = httpx.MockTransport(recording_handler)
    return GeminiAnalysisClient(
        api_key="test-key",
        model="gemini-test",
        base_url="https://example.test/v1beta",
        client=httpx.AsyncClient(transport=transport),
    )


class TestConfiguration:

    def test_missing_key_raises(self) -> None:
        with pytest.raises(AnalysisNotConfiguredError):
            GeminiAnalysisClient(api_key="")

    def test_from_config(self) -> None:
        config = AnalysisServiceConfig(api_key=SecretStr("k"), model="m", base_url="https://x.test/v1/")
        client = GeminiAnalysisClient.from_config(config)
        assert client.endpoint == "https://x.test/v1/models/m:generateContent"

    def test_from_config_without_key(self) -> None:
        with pytest.raises(AnalysisNotConfiguredError):
            GeminiAnalysisClient.from_config(AnalysisServiceConfig())


class TestPrompts:

    def test_mutation_prompt_states_length(self) -> None:
        prompt = build_mutation_prompt("ACGT")
        assert '"ACGT"' in prompt
        assert "array of 4 numbers" in prompt

    def test_crispr_prompt_lists_candidates(self) -> None:
        candidates = scan_for_candidates("A" * 21 + "GGG")
        prompt = build_crispr_prompt(candidates)
        assert f"- Position 1: {'A' * 20}" in prompt
        assert f"- Position 2: {'A' * 20}" in prompt


class TestMutationRequest:

    @pytest.mark.asyncio
    async def test_parses_response(self) -> None:
        seq = TEST_SEQUENCES["single_target"]
        requests = []
        client = make_client(
            lambda request: httpx.Response(200, json=gemini_response(mutation_payload(len(seq)))),
            requests,
        )
        result = await client.request_mutation_analysis(seq)

        assert result.classification == Classification.MUTATED
        assert result.clinical_impact.clinical_significance == ClinicalSignificance.PATHOGENIC
        assert len(result.attention_weights) == len(seq)

        request = requests[0]
        assert request.url.path == "/v1beta/models/gemini-test:generateContent"
        assert request.headers["x-goog-api-key"] == "test-key"
        body = json.loads(request.content)
        assert body["generationConfig"]["responseMimeType"] == "application/json"
        assert body["generationConfig"]["responseSchema"]["type"] == "OBJECT"

    @pytest.mark.asyncio
    async def test_wrong_length_weights_are_passed_through(self) -> None:
        # The client reports what the model said; the service reconciles length
        client = make_client(
            lambda request: httpx.Response(200, json=gemini_response(mutation_payload(10, 3)))
        )
        result = await client.request_mutation_analysis("A" * 10)
        assert len(result.attention_weights) == 3

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(500, json={"error": {"message": "internal"}}),
            httpx.Response(200, json={"candidates": []}),
            httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": "not json"}]}}]}),
            httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": ""}]}}]}),
            httpx.Response(200, json={"candidates": [{"content": {"parts": ["not-an-object"]}}]}),
            httpx.Response(200, json={"candidates": [{"content": {"parts": None}}]}),
            httpx.Response(200, json=gemini_response({"classification": "Mutated"})),
            httpx.Response(200, json=gemini_response({**mutation_payload(4), "probability": 1.7})),
            httpx.Response(200, text="<html>gateway</html>"),
        ],
    )
    async def test_failures_become_analysis_failed(self, response) -> None:
        client = make_client(lambda request: response)
        with pytest.raises(AnalysisFailedError) as exc_info:
            await client.request_mutation_analysis("ACGT")
        assert exc_info.value.kind == "mutation"
        assert exc_info.value.message == MUTATION_FAILURE_MESSAGE

    @pytest.mark.asyncio
    async def test_transport_error(self) -> None:
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)
        with pytest.raises(AnalysisFailedError) as exc_info:
            await client.request_mutation_analysis("ACGT")
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


class TestCrisprRequest:

    @pytest.mark.asyncio
    async def test_parses_array_response(self) -> None:
        candidates = scan_for_candidates("A" * 21 + "GGG")
        client = make_client(
            lambda request: httpx.Response(200, json=gemini_response(crispr_payload(candidates)))
        )
        result = await client.request_crispr_analysis(candidates)
        assert [t.position for t in result.targets] == [1, 2]
        assert result.targets[0].risk_level == RiskLevel.SAFE
        assert result.targets[1].safety_score == pytest.approx(0.6)

    @pytest.mark.asyncio
    async def test_echoed_values_are_not_cross_checked(self) -> None:
        candidates = scan_for_candidates(TEST_SEQUENCES["single_target"])
        echoed = crispr_payload(candidates)
        echoed[0]["position"] = 99
        client = make_client(lambda request: httpx.Response(200, json=gemini_response(echoed)))
        result = await client.request_crispr_analysis(candidates)
        assert result.targets[0].position == 99

    @pytest.mark.asyncio
    async def test_accepts_wrapped_targets(self) -> None:
        candidates = scan_for_candidates(TEST_SEQUENCES["single_target"])
        payload = {"targets": crispr_payload(candidates)}
        client = make_client(lambda request: httpx.Response(200, json=gemini_response(payload)))
        result = await client.request_crispr_analysis(candidates)
        assert len(result.targets) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"position": 1},
            [{"position": 1, "sequence": "A" * 20}],
            [{**crispr_payload(scan_for_candidates("A" * 20 + "CGG"))[0], "riskLevel": "Unknown"}],
        ],
    )
    async def test_bad_payloads(self, payload) -> None:
        candidates = scan_for_candidates(TEST_SEQUENCES["single_target"])
        client = make_client(lambda request: httpx.Response(200, json=gemini_response(payload)))
        with pytest.raises(AnalysisFailedError) as exc_info:
            await client.request_crispr_analysis(candidates)
        assert exc_info.value.kind == "crispr"
        assert str(exc_info.value) == CRISPR_FAILURE_MESSAGE
