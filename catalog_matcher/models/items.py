"""Pydantic models for extracted inquiry line items"""

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ItemSource = Literal[
    "email_text",
    "email_html_table",
    "xlsx",
    "pdf",
]


class ParsedQuantity(BaseModel):
    """Quantity and unit parsed out of a raw line"""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {"qty": 100.0, "unit": "шт", "qty_raw": "100 шт"}
        },
    )

    qty: Optional[float] = Field(None, description="Parsed quantity")
    unit: Optional[str] = Field(None, description="Canonical unit (шт/м/кг/уп)")
    qty_raw: Optional[str] = Field(
        None, description="Matched substring, used to strip the quantity from a name"
    )


class ExtractionItem(BaseModel):
    """A single line item extracted from a purchase inquiry"""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "line_no": 1,
                "source": "email_text",
                "raw_line": "ВВГнг 3х2.5 100 шт",
                "name_or_code": "ВВГнг 3х2.5",
                "qty": 100.0,
                "unit": "шт",
                "meta": {"qty_raw": "100 шт"},
            }
        }
    )

    line_no: int = Field(..., ge=1, description="Line number within the inquiry")
    source: ItemSource = Field(..., description="Where the line came from")
    raw_line: str = Field(..., description="Raw text of the line")
    name_or_code: Optional[str] = Field(
        None, description="Parsed product name or code, if any"
    )
    qty: Optional[float] = Field(None, description="Parsed quantity")
    unit: Optional[str] = Field(None, description="Parsed unit")
    meta: Dict[str, Any] = Field(
        default_factory=dict, description="Extractor specific details"
    )


class NormalizedItem(ExtractionItem):
    """Extraction item with its name-or-code in normalized header form"""

    normalized_name_or_code: str = Field(
        default="",
        description="Normalized name-or-code (falls back to the normalized raw line)",
    )
