"""
AutoOligo Web API

FastAPI interface to the point-mutation design engine.
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Dict, Any
import logging

from autooligo import __version__


logger = logging.getLogger(__name__)

app = FastAPI(
    title="AutoOligo",
    description="CRISPR point mutation designer for yeast",
    version=__version__,
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

class DesignRequest(BaseModel):
    sequence: str = Field(..., min_length=23, max_length=20000, description="Coding sequence, starting at ATG")
    residue: int = Field(..., ge=1, description="1-based residue to mutate")
    amino_acid: str = Field(..., min_length=1, max_length=1, description="New amino acid (single-letter code)")
    oligo_length: Optional[int] = Field(None, ge=60, le=100, description="Repair oligo length (60-100 nt)")
    gene_id: str = Field("input", description="Gene identifier")
    symbol: str = Field("input", description="Gene symbol")
    description: Optional[str] = None
    rank: bool = Field(False, description="Order by score category and strategy")

    @field_validator('sequence')
    @classmethod
    def validate_sequence(cls, v: str) -> str:
        v = "".join(v.split()).upper()
        invalid = set(v) - set("ACGTN")
        if invalid:
            raise ValueError(f"Invalid bases in sequence: {sorted(invalid)}. Only A, C, G, T, N allowed.")
        return v

    @field_validator('amino_acid')
    @classmethod
    def validate_amino_acid(cls, v: str) -> str:
        from autooligo.design.codons import STANDARD_AMINO_ACIDS
        v = v.upper()
        if v not in STANDARD_AMINO_ACIDS:
            raise ValueError(f"Invalid amino acid {v!r}. Must be one of: {''.join(sorted(STANDARD_AMINO_ACIDS))}")
        return v


class ScoreRequest(BaseModel):
    guide_with_pam: str = Field(..., min_length=23, max_length=23, description="20-nt spacer + PAM")


# =============================================================================
# API Endpoints
# =============================================================================

@app.get("/api/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


@app.post("/api/design")
async def design_point_mutation(request: DesignRequest) -> Dict[str, Any]:
    """Design repair templates and cloning oligos for a point mutation."""
    from autooligo.models.data_classes import GeneInfo
    from autooligo.design import (
        NoSiteFoundError,
        NoViableTemplateError,
        rank_results,
    )
    from autooligo.design import design_point_mutation as run_design

    gene = GeneInfo(
        id=request.gene_id,
        symbol=request.symbol,
        sequence=request.sequence,
        description=request.description,
    )
    try:
        design_results = run_design(
            gene, request.residue, request.amino_acid, oligo_length=request.oligo_length
        )
    except NoSiteFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except NoViableTemplateError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    results = design_results.results
    if request.rank:
        results = rank_results(results)
    logger.info("Designed %d templates for %s", len(results), design_results.mutation_label)

    return {
        "status": "success",
        "mutation": design_results.mutation_label,
        "n_sites_found": design_results.n_sites_found,
        "results": [r.model_dump(mode="json") for r in results],
    }


@app.post("/api/score")
async def score_guide(request: ScoreRequest) -> Dict[str, Any]:
    """Heuristic efficiency score with per-rule breakdown."""
    from autooligo.design.efficiency import RuleBasedScorer

    total, rules = RuleBasedScorer().score(request.guide_with_pam)
    return {
        "score": total,
        "rules": [
            {"rule": r.rule_name, "delta": r.delta, "reason": r.reason}
            for r in rules.values()
        ],
    }


def run(host: Optional[str] = None, port: Optional[int] = None) -> None:
    """Serve the API with uvicorn."""
    import uvicorn
    from autooligo.config import get_config

    config = get_config()
    uvicorn.run(app, host=host or config.api_host, port=port or config.api_port)
