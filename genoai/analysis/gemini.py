"""
Gemini-backed analysis collaborator.

Calls the generateContent REST endpoint with a JSON response schema and
validates the returned text against the payload models.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

import httpx

from genoai.analysis.collaborator import (
    AnalysisFailedError,
    AnalysisNotConfiguredError,
    CRISPR_FAILURE_MESSAGE,
    MUTATION_FAILURE_MESSAGE,
)
from genoai.config import AnalysisServiceConfig
from genoai.models.data_classes import CrisprAnalysis, GuideCandidate, MutationAnalysis
from genoai.models.enums import Classification, ClinicalSignificance, RiskLevel


logger = logging.getLogger(__name__)


# =============================================================================
# Response Schemas
# =============================================================================

MUTATION_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "classification": {"type": "STRING", "enum": [c.value for c in Classification]},
        "probability": {"type": "NUMBER"},
        "clinicalImpact": {
            "type": "OBJECT",
            "properties": {
                "gene": {"type": "STRING"},
                "diseaseAssociation": {"type": "STRING"},
                "proteinImpact": {"type": "STRING"},
                "clinicalSignificance": {
                    "type": "STRING",
                    "enum": [s.value for s in ClinicalSignificance],
                },
            },
            "required": ["gene", "diseaseAssociation", "proteinImpact", "clinicalSignificance"],
        },
        "aiExplanation": {"type": "STRING"},
        "attentionWeights": {"type": "ARRAY", "items": {"type": "NUMBER"}},
    },
    "required": ["classification", "probability", "clinicalImpact", "aiExplanation", "attentionWeights"],
}

CRISPR_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "position": {"type": "INTEGER"},
            "sequence": {"type": "STRING"},
            "gcContent": {"type": "NUMBER"},
            "safetyScore": {"type": "NUMBER"},
            "riskLevel": {"type": "STRING", "enum": [r.value for r in RiskLevel]},
            "justification": {"type": "STRING"},
        },
        "required": ["position", "sequence", "gcContent", "safetyScore", "riskLevel", "justification"],
    },
}


# =============================================================================
# Prompts
# =============================================================================

def build_mutation_prompt(sequence: str) -> str:
    n = len(sequence)
    return (
        "You are a clinical bioinformatics AI. Your knowledge is based on models trained on "
        "datasets like the 1000 Genomes Project, IGVC, and databases like ClinVar, COSMIC, and UniProt.\n"
        f'Analyze the following DNA sequence of length {n} characters: "{sequence}".\n\n'
        "Perform the following tasks:\n"
        "1. Classification: Classify the sequence as 'Mutated' or 'Normal'.\n"
        "2. Probability: Provide a mutation probability score from 0.0 to 1.0.\n"
        "3. Clinical Impact: Based on simulated queries to ClinVar, COSMIC, and UniProt, identify the "
        "most likely biological impact. Provide the gene name, associated disease, protein impact, and "
        "clinical significance ('Benign', 'Likely Pathogenic', 'Pathogenic', 'Uncertain Significance'). "
        "If no specific impact is found, state that.\n"
        "4. AI Explanation: Write a brief paragraph explaining which regions of the sequence most "
        "influenced your decision, as if you were explaining it to a clinician.\n"
        f"5. Attention Weights: Generate an 'attentionWeights' array of {n} numbers (between 0.0 and 1.0). "
        "This array MUST have the exact same length as the sequence.\n\n"
        "Return a single, valid JSON object."
    )


def build_crispr_prompt(candidates: List[GuideCandidate]) -> str:
    listing = "\n".join(f"- Position {c.position}: {c.sequence}" for c in candidates)
    return (
        "You are a CRISPR-Cas9 analysis AI, with knowledge from E-CRISP, CRISPRBench, and Addgene. "
        "I have identified potential gRNA sequences preceding NGG PAM sites.\n\n"
        f"Potential targets:\n{listing}\n\n"
        "For each target, perform a comprehensive analysis:\n"
        "1. GC Content: Calculate the GC content percentage of the gRNA sequence.\n"
        "2. Safety Score: Provide a safety score from 0.0 to 1.0 (1.0 being safest) based on "
        "predicted off-target effects.\n"
        "3. Risk Level: Classify the risk as 'Safe', 'Moderate', or 'Risky'.\n"
        "4. Justification: Provide a brief justification for the risk assessment.\n\n"
        "Return a valid JSON array of objects, one for each target. "
        "Ensure position and sequence match the input exactly."
    )


# =============================================================================
# Client
# =============================================================================

class GeminiAnalysisClient:
    """
    AnalysisCollaborator backed by the Gemini generateContent API.

    Every failure (transport, HTTP status, empty/unparsable text, payload not
    matching the models) is raised as AnalysisFailedError. No retries.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 60.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        if not api_key:
            raise AnalysisNotConfiguredError(
                "No analysis API key configured. Set GENOAI_ANALYSIS__API_KEY."
            )
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    @classmethod
    def from_config(cls, service_config: AnalysisServiceConfig) -> "GeminiAnalysisClient":
        api_key = service_config.api_key.get_secret_value() if service_config.api_key else ""
        return cls(
            api_key=api_key,
            model=service_config.model,
            base_url=service_config.base_url,
            timeout=service_config.timeout,
        )

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def request_mutation_analysis(self, sequence: str) -> MutationAnalysis:
        try:
            payload = await self._generate_json(build_mutation_prompt(sequence), MUTATION_RESPONSE_SCHEMA)
            return MutationAnalysis.model_validate(payload)
        except (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError) as e:
            logger.error("Error in mutation analysis: %s", e)
            raise AnalysisFailedError("mutation", MUTATION_FAILURE_MESSAGE) from e

    async def request_crispr_analysis(self, candidates: List[GuideCandidate]) -> CrisprAnalysis:
        try:
            payload = await self._generate_json(build_crispr_prompt(candidates), CRISPR_RESPONSE_SCHEMA)
            if isinstance(payload, dict) and "targets" in payload:
                payload = payload["targets"]
            if not isinstance(payload, list):
                raise TypeError(f"Expected a JSON array of targets, got {type(payload).__name__}")
            return CrisprAnalysis(targets=payload)
        except (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError) as e:
            logger.error("Error in CRISPR analysis: %s", e)
            raise AnalysisFailedError("crispr", CRISPR_FAILURE_MESSAGE) from e

    async def _generate_json(self, prompt: str, schema: Dict[str, Any]) -> Any:
        """POST a prompt and decode the JSON text of the first candidate."""
        body = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": schema,
            },
        }
        headers = {"x-goog-api-key": self.api_key}

        if self._client is not None:
            response = await self._client.post(self.endpoint, json=body, headers=headers)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.endpoint, json=body, headers=headers)
        response.raise_for_status()

        parts = response.json()["candidates"][0]["content"]["parts"]
        if not all(isinstance(part, dict) for part in parts):
            raise TypeError("Response content parts must be JSON objects")
        text = "".join(part.get("text", "") for part in parts).strip()
        if not text:
            raise ValueError("Empty response text from analysis service")
        return json.loads(text)
