"""
GenoAI Web API

FastAPI-based interface for sequence normalization, guide scanning and
remote mutation/CRISPR analysis.
"""

from fastapi import Depends, FastAPI, File, HTTPException, Query, Request, Response, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field
from typing import Dict, List
from collections import defaultdict
import logging
import time

from genoai import __version__
from genoai.analysis.collaborator import AnalysisFailedError, AnalysisNotConfiguredError
from genoai.analysis.gemini import GeminiAnalysisClient
from genoai.analysis.service import AnalysisService
from genoai.config import get_config
from genoai.design.composition import gc_content
from genoai.design.normalizer import ACCEPTED_FILE_SUFFIXES, check_file_suffix, normalize
from genoai.design.pam_scanner import GuideScanner
from genoai.models.data_classes import CrisprAnalysis, MutationAnalysis, NormalizedSequence
from genoai.models.enums import ClinicalSignificance, RiskLevel, TargetOrder
from genoai.reporting import export
from genoai.reporting.report import generate_report_text, order_targets, report_filename


logger = logging.getLogger(__name__)

MAX_SEQUENCE_LENGTH = 100_000


# Simple in-memory rate limiter
class RateLimiter:
    def __init__(self, requests_per_minute: int = 60):
        self.requests_per_minute = requests_per_minute
        self.requests: Dict[str, List[float]] = defaultdict(list)

    def is_allowed(self, client_id: str) -> bool:
        now = time.time()
        minute_ago = now - 60

        # Clean old requests
        self.requests[client_id] = [t for t in self.requests[client_id] if t > minute_ago]

        if len(self.requests[client_id]) >= self.requests_per_minute:
            return False

        self.requests[client_id].append(now)
        return True


rate_limiter = RateLimiter(requests_per_minute=get_config().rate_limit_per_minute)

app = FastAPI(
    title="GenoAI",
    description="DNA mutation and CRISPR target analysis",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Request Models
# =============================================================================

class SequenceRequest(BaseModel):
    sequence: str = Field(..., max_length=MAX_SEQUENCE_LENGTH, description="Raw DNA text (may contain whitespace or FASTA headers)")
    from_file: bool = Field(False, description="Treat the text as file content and strip FASTA headers")


class ReportRequest(BaseModel):
    sequence: str = Field(..., max_length=MAX_SEQUENCE_LENGTH, description="Analyzed DNA sequence")
    mutation: MutationAnalysis
    crispr: CrisprAnalysis


# =============================================================================
# Dependencies
# =============================================================================

def get_scanner() -> GuideScanner:
    return GuideScanner.from_config(get_config().scan)


def get_analysis_service(scanner: GuideScanner = Depends(get_scanner)) -> AnalysisService:
    """Build the analysis service around the configured remote collaborator."""
    config = get_config()
    try:
        collaborator = GeminiAnalysisClient.from_config(config.analysis)
    except AnalysisNotConfiguredError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return AnalysisService(collaborator, scanner=scanner)


def require_sequence(request: SequenceRequest) -> NormalizedSequence:
    """Normalized request sequence; 400 when nothing valid remains."""
    normalized = normalize(request.sequence, from_file=request.from_file)
    if not normalized.sequence:
        raise HTTPException(status_code=400, detail="Sequence is empty after removing invalid characters")
    return normalized


def _attachment(content: str, media_type: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


# =============================================================================
# API Endpoints
# =============================================================================

@app.middleware("http")
async def rate_limit_middleware(request: Request, call_next):
    """Apply rate limiting to API endpoints."""
    if request.url.path.startswith("/api/"):
        client_ip = request.client.host if request.client else "unknown"
        if not rate_limiter.is_allowed(client_ip):
            return JSONResponse(
                status_code=429,
                content={
                    "detail": "Rate limit exceeded. Please wait before making more requests.",
                    "retry_after": 60
                },
                headers={"Retry-After": "60"}
            )
    response = await call_next(request)
    return response


@app.get("/api/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


@app.get("/api/info")
async def info(scanner: GuideScanner = Depends(get_scanner)):
    """Describe accepted input and the categories the analysis service returns."""
    return {
        "alphabet": ["A", "T", "G", "C"],
        "guide_length": scanner.guide_length,
        "pam": "N" + scanner.pam_motif,
        "accepted_file_types": list(ACCEPTED_FILE_SUFFIXES),
        "risk_levels": [r.value for r in RiskLevel],
        "clinical_significance": [s.value for s in ClinicalSignificance],
        "analysis_enabled": get_config().analysis_enabled,
    }


@app.post("/api/normalize")
async def normalize_sequence(request: SequenceRequest) -> NormalizedSequence:
    """Canonicalize raw text into an uppercase A/T/G/C sequence."""
    return normalize(request.sequence, from_file=request.from_file)


@app.post("/api/normalize/upload")
async def normalize_upload(file: UploadFile = File(...)) -> NormalizedSequence:
    """Canonicalize an uploaded .fasta/.fa/.txt file."""
    try:
        check_file_suffix(file.filename or "")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    raw = await file.read()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="Sequence file must be UTF-8 text")
    return normalize(text, from_file=True)


@app.post("/api/targets")
async def find_targets(request: SequenceRequest, scanner: GuideScanner = Depends(get_scanner)):
    """Scan for guide RNA candidates without calling the analysis service."""
    normalized = normalize(request.sequence, from_file=request.from_file)
    candidates = scanner.scan(normalized.sequence)
    return {
        "normalization": normalized.model_dump(),
        "n_targets": len(candidates),
        "targets": [
            {
                "position": c.position,
                "sequence": c.sequence,
                "gc_content": round(gc_content(c.sequence), 1),
            }
            for c in candidates
        ],
    }


@app.post("/api/analyze/mutation")
async def analyze_mutation(
    normalized: NormalizedSequence = Depends(require_sequence),
    service: AnalysisService = Depends(get_analysis_service),
):
    """Classify the sequence with the remote model."""
    try:
        result = await service.analyze_mutation(normalized.sequence)
    except AnalysisFailedError as e:
        raise HTTPException(status_code=502, detail=e.message)

    return {
        "status": "success",
        "sequence_length": normalized.length,
        "normalization": normalized.model_dump(),
        **result.model_dump(mode="json", by_alias=True),
    }


@app.post("/api/analyze/crispr")
async def analyze_crispr(
    normalized: NormalizedSequence = Depends(require_sequence),
    order: TargetOrder = Query(TargetOrder.POSITION, description="Order targets by position or safety score"),
    service: AnalysisService = Depends(get_analysis_service),
):
    """Score every guide candidate with the remote model."""
    try:
        result = await service.analyze_crispr(normalized.sequence)
    except AnalysisFailedError as e:
        raise HTTPException(status_code=502, detail=e.message)

    ordered = CrisprAnalysis(targets=order_targets(result.targets, order))
    return {
        "status": "success",
        "sequence_length": normalized.length,
        "normalization": normalized.model_dump(),
        "order": order.value,
        **ordered.model_dump(mode="json", by_alias=True),
    }


@app.post("/api/report")
async def build_report(request: ReportRequest):
    """Render the plain-text clinical report for completed analyses."""
    text = generate_report_text(request.mutation, request.crispr, len(request.sequence))
    return PlainTextResponse(
        content=text,
        headers={"Content-Disposition": f"attachment; filename={report_filename()}"},
    )


@app.post("/api/export/csv")
async def export_csv(analysis: CrisprAnalysis, order: TargetOrder = TargetOrder.POSITION):
    """Export CRISPR targets as CSV."""
    return _attachment(export.to_csv(analysis, order), "text/csv", export.export_filename("csv"))


@app.post("/api/export/json")
async def export_json(analysis: CrisprAnalysis):
    """Export CRISPR targets as JSON."""
    return _attachment(export.to_json(analysis), "application/json", export.export_filename("json"))


@app.post("/api/export/fasta")
async def export_fasta(analysis: CrisprAnalysis, order: TargetOrder = TargetOrder.POSITION):
    """Export guide sequences as FASTA."""
    return _attachment(export.to_fasta(analysis, order), "text/plain", export.export_filename("fasta"))


def serve(host: str, port: int) -> None:
    """Run the API with uvicorn."""
    import uvicorn

    logger.info("Starting GenoAI API on %s:%d", host, port)
    uvicorn.run(app, host=host, port=port)

