"""Input adapters that normalize raw card data."""

from .cards import (
    DEFAULT_CARD_MAPPING,
    CardRow,
    classify_card_type,
    load_cards_csv,
    load_records_from_csv,
    record_from_payload,
    rows_to_records,
)

__all__ = [
    "CardRow",
    "DEFAULT_CARD_MAPPING",
    "classify_card_type",
    "load_cards_csv",
    "load_records_from_csv",
    "record_from_payload",
    "rows_to_records",
]
