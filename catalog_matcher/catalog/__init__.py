"""Catalog snapshot ingestion"""

from .loader import load_catalog_snapshot, parse_product_record, parse_product_records

__all__ = ["load_catalog_snapshot", "parse_product_record", "parse_product_records"]
