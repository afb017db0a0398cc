"""Models for the matcher config file"""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MatchThresholds(BaseModel):
    """Tunables of the tiered match decision"""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "ok_threshold": 0.90,
                "review_threshold": 0.72,
                "gap_threshold": 0.08,
                "scan_cap": 1500,
                "candidate_limit": 5,
                "missing_qty_confidence_cap": 0.70,
                "min_valid_qty": 0.0,
            }
        },
    )

    ok_threshold: float = Field(
        default=0.90, ge=0.0, le=1.0, description="Minimum fuzzy score for an automatic match"
    )
    review_threshold: float = Field(
        default=0.72, ge=0.0, le=1.0, description="Minimum fuzzy score for review"
    )
    gap_threshold: float = Field(
        default=0.08,
        ge=0.0,
        le=1.0,
        description="Minimum margin between the best and second-best fuzzy candidate",
    )
    scan_cap: int = Field(
        default=1500,
        ge=1,
        description="Products scanned when the query shares no token with the catalog",
    )
    candidate_limit: int = Field(
        default=5, ge=1, le=5, description="Maximum candidates attached to a result"
    )
    missing_qty_confidence_cap: float = Field(
        default=0.70,
        ge=0.0,
        le=1.0,
        description="Confidence cap applied when no usable quantity was parsed",
    )
    min_valid_qty: float = Field(
        default=0.0,
        description="Quantities at or below this value count as missing",
    )

    @model_validator(mode="after")
    def _check_threshold_order(self) -> "MatchThresholds":
        if self.review_threshold > self.ok_threshold:
            raise ValueError(
                f"review_threshold ({self.review_threshold}) must not exceed "
                f"ok_threshold ({self.ok_threshold})"
            )
        return self


class MatcherConfig(BaseModel):
    """Complete matcher configuration"""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "thresholds": {
                    "ok_threshold": 0.90,
                    "review_threshold": 0.72,
                    "gap_threshold": 0.08,
                    "scan_cap": 1500,
                }
            }
        }
    )

    thresholds: MatchThresholds = Field(
        default_factory=MatchThresholds, description="Match decision tunables"
    )
