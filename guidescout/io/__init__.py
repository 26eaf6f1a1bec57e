"""Export package."""

from guidescout.io.export import (
    CSV_HEADERS,
    guides_to_csv,
    guides_to_tsv,
    guides_to_records,
    write_guides_csv,
)

__all__ = [
    "CSV_HEADERS",
    "guides_to_csv",
    "guides_to_tsv",
    "guides_to_records",
    "write_guides_csv",
]
