"""Pydantic models for catalog product records"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _clean_optional_str(value: Any) -> Optional[str]:
    """Trim strings and turn blanks (or non-strings) into None."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


class ProductFlatCodes(BaseModel):
    """Identifying codes of a product in the flat code schemes"""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "elcom": "ELC0100203802",
                "manufacturer": "MNF-123",
                "raec": "1234567",
                "pc": None,
                "etm": "ETM9876",
            }
        },
    )

    elcom: Optional[str] = Field(None, description="Distributor (Elcom) code")
    manufacturer: Optional[str] = Field(None, description="Manufacturer part number")
    raec: Optional[str] = Field(None, description="RAEC classifier code")
    pc: Optional[str] = Field(None, description="PC scheme code")
    etm: Optional[str] = Field(None, description="ETM scheme code")

    @field_validator("elcom", "manufacturer", "raec", "pc", "etm", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Optional[str]:
        return _clean_optional_str(value)

    def values(self) -> List[str]:
        """Return the non-empty codes in scheme order"""
        return [
            code
            for code in (self.elcom, self.manufacturer, self.raec, self.pc, self.etm)
            if code
        ]


class ProductRecord(BaseModel):
    """A single catalog product, immutable once loaded into an index"""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "syncUid": "sync-1",
                "header": "Кабель ВВГнг 3x2.5",
                "articul": "ELC0100203802",
                "unitHeader": "м",
                "manufacturerHeader": "Элком",
                "multiplicityOrder": 1,
                "analogCodes": [],
                "flatCodes": {"manufacturer": "MNF-123"},
                "updatedAt": "2025-02-15T10:30:00Z",
            }
        },
    )

    id: int = Field(..., description="Unique, stable catalog product ID")
    header: str = Field(..., min_length=1, description="Product display name")
    sync_uid: Optional[str] = Field(
        None, alias="syncUid", description="Sync identifier of the catalog API"
    )
    articul: Optional[str] = Field(None, description="Catalog article code")
    unit_header: Optional[str] = Field(
        None, alias="unitHeader", description="Unit of sale (e.g. 'м', 'шт')"
    )
    manufacturer_header: Optional[str] = Field(
        None, alias="manufacturerHeader", description="Manufacturer name"
    )
    multiplicity_order: Optional[float] = Field(
        None, alias="multiplicityOrder", description="Order multiplicity"
    )
    analog_codes: List[str] = Field(
        default_factory=list, alias="analogCodes", description="Codes of analog products"
    )
    flat_codes: ProductFlatCodes = Field(
        default_factory=ProductFlatCodes,
        alias="flatCodes",
        description="Codes in the flat code schemes",
    )
    updated_at: Optional[str] = Field(
        None, alias="updatedAt", description="Last update timestamp from the catalog"
    )
    raw_payload: Dict[str, Any] = Field(
        default_factory=dict,
        alias="rawPayload",
        description="Original catalog payload kept for audit",
    )

    @field_validator("header", mode="before")
    @classmethod
    def _strip_header(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator(
        "sync_uid", "articul", "unit_header", "manufacturer_header", "updated_at",
        mode="before",
    )
    @classmethod
    def _blank_to_none(cls, value: Any) -> Optional[str]:
        return _clean_optional_str(value)

    @field_validator("multiplicity_order", mode="before")
    @classmethod
    def _numeric_or_none(cls, value: Any) -> Optional[float]:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        return float(value)

    @field_validator("analog_codes", mode="before")
    @classmethod
    def _clean_analog_codes(cls, value: Any) -> List[str]:
        if not isinstance(value, (list, tuple)):
            return []
        return [code.strip() for code in value if isinstance(code, str) and code.strip()]

    @field_validator("flat_codes", mode="before")
    @classmethod
    def _default_flat_codes(cls, value: Any) -> Any:
        if value is None or not isinstance(value, (dict, ProductFlatCodes)):
            return {}
        return value

    def identifying_codes(self) -> List[str]:
        """
        Collect every identifying code of the product.

        Order: articul, sync identifier, flat code schemes, analog codes.

        Returns:
            List of raw (not normalized) codes
        """
        codes = []
        if self.articul:
            codes.append(self.articul)
        if self.sync_uid:
            codes.append(self.sync_uid)
        codes.extend(self.flat_codes.values())
        codes.extend(self.analog_codes)
        return codes
