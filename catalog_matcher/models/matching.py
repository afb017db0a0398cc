"""Pydantic models for match results"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from catalog_matcher.models.product import ProductFlatCodes, ProductRecord

MatchStatus = Literal["OK", "REVIEW", "NOT_FOUND"]

MatchReason = Literal["CODE", "HEADER", "FUZZY", "NONE"]


class MatchCandidate(BaseModel):
    """A scored catalog product proposed for a line item"""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "code": "ELC0100203802",
                "sync_uid": "sync-1",
                "header": "Кабель ВВГнг 3x2.5",
                "score": 0.86,
            }
        },
    )

    id: int = Field(..., description="Catalog product ID")
    code: Optional[str] = Field(None, description="Catalog article code")
    sync_uid: Optional[str] = Field(None, description="Sync identifier")
    header: str = Field(..., description="Product display name")
    score: float = Field(..., ge=0.0, le=1.0, description="Candidate score")

    @classmethod
    def from_product(cls, product: ProductRecord, score: float) -> "MatchCandidate":
        return cls(
            id=product.id,
            code=product.articul,
            sync_uid=product.sync_uid,
            header=product.header,
            score=score,
        )


class MatchProduct(BaseModel):
    """Snapshot of the matched product carried by a result"""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Catalog product ID")
    sync_uid: Optional[str] = Field(None, description="Sync identifier")
    header: str = Field(..., description="Product display name")
    articul: Optional[str] = Field(None, description="Catalog article code")
    unit_header: Optional[str] = Field(None, description="Unit of sale")
    flat_codes: ProductFlatCodes = Field(
        default_factory=ProductFlatCodes, description="Flat scheme codes"
    )

    @classmethod
    def from_product(cls, product: ProductRecord) -> "MatchProduct":
        return cls(
            id=product.id,
            sync_uid=product.sync_uid,
            header=product.header,
            articul=product.articul,
            unit_header=product.unit_header,
            flat_codes=product.flat_codes,
        )


class MatchResult(BaseModel):
    """Final verdict for one line item, never mutated after creation"""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "status": "OK",
                "confidence": 0.99,
                "reason": "CODE",
                "product": {"id": 1, "header": "Кабель ВВГнг 3x2.5"},
                "candidates": [],
            }
        },
    )

    status: MatchStatus = Field(..., description="OK, REVIEW or NOT_FOUND")
    confidence: float = Field(
        ..., ge=0.0, le=1.0, description="Tier constant or ranking score, not a probability"
    )
    reason: MatchReason = Field(..., description="Tier that produced the verdict")
    product: Optional[MatchProduct] = Field(None, description="Matched product")
    candidates: List[MatchCandidate] = Field(
        default_factory=list, description="Up to 5 candidates, best first"
    )


class MatchSummary(BaseModel):
    """Status counts over a batch of match results"""

    extracted: int = Field(default=0, ge=0, description="Items matched")
    ok: int = Field(default=0, ge=0, description="Items resolved automatically")
    review: int = Field(default=0, ge=0, description="Items routed to review")
    not_found: int = Field(default=0, ge=0, description="Items without a match")
