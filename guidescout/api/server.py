"""
GuideScout Web API

FastAPI-based JSON interface to the guide finding engine.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.concurrency import run_in_threadpool
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List, Dict, Any
from datetime import datetime
import logging
import uvicorn

from guidescout import __version__
from guidescout.config import get_config, configure_logging
from guidescout.models.enums import SortField, DiffType
from guidescout.models.data_classes import AnalysisResult, GuideRow
from guidescout.design.pam_table import (
    CAS_PAM_TABLE,
    IUPAC_CODES,
    UnknownCasSystemError,
    iupac_legend,
    list_cas_systems,
)
from guidescout.design.sequence import prepare_sequence
from guidescout.analysis.pipeline import analyze, SequenceTooShortError
from guidescout.analysis.filtering import sort_guides, gc_band, score_band
from guidescout.analysis.sequence_map import (
    get_sequence_position_types,
    slice_context,
    select_map_guides,
    build_map_lines,
)
from guidescout.analysis.compare import compute_diff, compare_stats
from guidescout.io.export import guides_to_csv, DEFAULT_FILENAME

logger = logging.getLogger(__name__)

settings = get_config()


@asynccontextmanager
async def lifespan(_app: FastAPI):
    configure_logging()
    yield


app = FastAPI(
    title="GuideScout",
    description="CRISPR guide RNA finder",
    version=__version__,
    lifespan=lifespan,
)

# CORS for development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Request/Response Models
# =============================================================================

class AnalyzeRequest(BaseModel):
    sequence: str = Field(
        ...,
        min_length=1,
        max_length=settings.api.max_sequence_length,
        description="DNA sequence or FASTA text; non-ATGC characters are dropped",
    )
    cas_system: Optional[str] = Field(None, description="CRISPR system name from /api/info")
    pam_pattern: Optional[str] = Field(None, min_length=1, max_length=12, description="Custom IUPAC PAM")
    guide_length: Optional[int] = Field(None, description="Guide length in nt")
    advanced_scores: Optional[bool] = Field(None, description="Compute self-complementarity and off-target-like scores")
    gc_min: Optional[float] = Field(None, ge=0, le=100)
    gc_max: Optional[float] = Field(None, ge=0, le=100)
    sort_by: SortField = Field(SortField.RANK, description="Sort field for the filtered table")
    descending: bool = False

    @field_validator('pam_pattern')
    @classmethod
    def validate_pam_pattern(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            v = v.strip().upper()
            if not v:
                raise ValueError("PAM pattern must not be blank")
            invalid = set(v) - set(IUPAC_CODES)
            if invalid:
                raise ValueError(
                    f"Invalid symbols in PAM: {sorted(invalid)}. Allowed: {', '.join(IUPAC_CODES)}"
                )
        return v

    @field_validator('guide_length')
    @classmethod
    def validate_guide_length(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and not get_config().guide_length_in_bounds(v):
            design = get_config().design
            raise ValueError(
                f"Guide length must be between {design.min_guide_length} and {design.max_guide_length}"
            )
        return v

    @model_validator(mode='after')
    def validate_gc_range(self) -> "AnalyzeRequest":
        if self.gc_min is not None and self.gc_max is not None and self.gc_min > self.gc_max:
            raise ValueError("gc_min must not exceed gc_max")
        return self

    def gc_range(self) -> Optional[tuple]:
        if self.gc_min is None and self.gc_max is None:
            return None
        design = get_config().design
        return (
            design.gc_min if self.gc_min is None else self.gc_min,
            design.gc_max if self.gc_max is None else self.gc_max,
        )


class MapRequest(AnalyzeRequest):
    top_n: int = Field(settings.design.map_top_n, ge=0, le=settings.design.map_max_guides)
    chars_per_line: int = Field(settings.design.chars_per_line, ge=10, le=500)
    rank: Optional[int] = Field(None, ge=1, description="Rank whose context window is returned")


class CompareRequest(BaseModel):
    sequence_a: str = Field(..., min_length=1, max_length=settings.api.max_sequence_length)
    sequence_b: str = Field(..., min_length=1, max_length=settings.api.max_sequence_length)


# =============================================================================
# Shared Helpers
# =============================================================================

def _run_analysis(request: AnalyzeRequest) -> AnalysisResult:
    """Run the analysis, mapping domain errors to HTTP 400."""
    try:
        return analyze(
            request.sequence,
            cas_system=request.cas_system,
            guide_length=request.guide_length,
            advanced=request.advanced_scores,
            gc_range=request.gc_range(),
            pam_pattern=request.pam_pattern,
        )
    except (UnknownCasSystemError, SequenceTooShortError) as e:
        raise HTTPException(status_code=400, detail=str(e))


async def _analyze_in_threadpool(request: AnalyzeRequest) -> AnalysisResult:
    # The off-target-like scan is quadratic; keep it off the event loop
    return await run_in_threadpool(_run_analysis, request)


def _guide_records(rows: List[GuideRow]) -> List[Dict[str, Any]]:
    """Row dicts with GC and score bands for colouring."""
    if not rows:
        return []
    totals = [row.total_score for row in rows]
    low, high = min(totals), max(totals)
    return [
        {
            **row.model_dump(mode="json"),
            "gc_band": gc_band(row.gc_percent).value,
            "score_band": score_band(row.total_score, low, high).value,
        }
        for row in rows
    ]


# =============================================================================
# API Endpoints
# =============================================================================

@app.get("/api/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


@app.get("/api/info")
async def info():
    """Get available options for analysis parameters."""
    design = get_config().design
    return {
        "cas_systems": [
            {"value": name, "pam": CAS_PAM_TABLE[name], "pam_length": len(CAS_PAM_TABLE[name])}
            for name in list_cas_systems()
        ],
        "iupac_codes": [
            {"code": code, "bases": bases} for code, bases in iupac_legend()
        ],
        "guide_length": {
            "min": design.min_guide_length,
            "max": design.max_guide_length,
            "default": design.default_guide_length,
        },
        "defaults": {
            "cas_system": design.default_cas_system,
            "advanced_scores": design.advanced_scores,
            "gc_min": design.gc_min,
            "gc_max": design.gc_max,
            "map_top_n": design.map_top_n,
            "chars_per_line": design.chars_per_line,
        },
        "sort_fields": [f.value for f in SortField],
    }


@app.post("/api/analyze")
async def analyze_sequence(request: AnalyzeRequest):
    """Find, score and rank guides in a sequence."""
    result = await _analyze_in_threadpool(request)
    filtered = sort_guides(result.filtered_guides, request.sort_by, ascending=not request.descending)
    payload = result.model_dump(mode="json")
    payload["guides"] = _guide_records(result.guides)
    payload["filtered_guides"] = _guide_records(filtered)
    payload["status"] = "success"
    return payload


@app.post("/api/map")
async def sequence_map(request: MapRequest):
    """Per-base categories and wrapped lines for the top-N filtered guides."""
    result = await _analyze_in_threadpool(request)
    design = get_config().design
    sequence = prepare_sequence(request.sequence)

    shown = select_map_guides(result.filtered_guides, request.top_n, design.map_max_guides)
    categories = get_sequence_position_types(sequence, shown)
    lines = build_map_lines(sequence, categories, request.chars_per_line)

    response: Dict[str, Any] = {
        "status": "success",
        "pam_pattern": result.pam_pattern,
        "sequence_length": len(sequence),
        "guides": _guide_records(shown),
        "categories": [c.value for c in categories],
        "lines": [line.model_dump(mode="json") for line in lines],
        "context": None,
    }

    if request.rank is not None:
        selected = next((g for g in result.filtered_guides if g.rank == request.rank), None)
        if selected is None:
            raise HTTPException(status_code=404, detail=f"No guide with rank {request.rank} after filtering")
        ctx = slice_context(
            sequence, selected.guide_start, selected.guide_end, selected.pam_end, design.context_flank
        )
        g0, g1 = ctx.relative(selected.guide_start, selected.guide_end)
        p0, p1 = ctx.relative(selected.pam_start, selected.pam_end)
        response["context"] = {
            **ctx.model_dump(mode="json"),
            "guide_range": [g0, g1],
            "pam_range": [p0, p1],
        }

    return response


@app.post("/api/compare")
async def compare_sequences(request: CompareRequest):
    """Position-wise comparison of two sequences."""
    seq_a = prepare_sequence(request.sequence_a)
    seq_b = prepare_sequence(request.sequence_b)
    if not seq_a or not seq_b:
        raise HTTPException(status_code=400, detail="Both sequences must contain A/T/G/C bases")

    diff = compute_diff(seq_a, seq_b)
    stats = compare_stats(diff)
    return {
        "status": "success",
        "length_a": len(seq_a),
        "length_b": len(seq_b),
        "stats": stats.model_dump(mode="json"),
        "differences": [d.model_dump(mode="json") for d in diff if d.type != DiffType.MATCH],
    }


@app.post("/api/export/csv")
async def export_csv(request: AnalyzeRequest, not_computed: str = ""):
    """Export the GC-filtered guide table as CSV."""
    result = await _analyze_in_threadpool(request)
    rows: List = sort_guides(result.filtered_guides, request.sort_by, ascending=not request.descending)
    content = guides_to_csv(rows, not_computed=not_computed)

    stem = DEFAULT_FILENAME.rsplit(".", 1)[0]
    filename = f"{stem}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.csv"
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"}
    )


def run(host: Optional[str] = None, port: Optional[int] = None) -> None:
    """Serve the API with uvicorn using configured host/port."""
    api = get_config().api
    uvicorn.run(app, host=host or api.host, port=port or api.port)


if __name__ == "__main__":
    run()
