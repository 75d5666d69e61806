"""Tab-delimited output for parsed taxonomy entries."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterator, List, NamedTuple, Optional

from rdf_taxonomy.config.vocabulary import (
    NO_PARENT_ID,
    OTHER_NAMES_COLUMNS,
    POSTGRES_NULL_VALUE,
    TAXONOMY_INFO_COLUMNS,
)
from rdf_taxonomy.entry import TaxonomyEntry
from rdf_taxonomy.options import ConverterOptions
from rdf_taxonomy.resolver import get_ancestor, get_grandparent

logger = logging.getLogger(__name__)

# Authority citations such as "Agromonas Ohta and Hattori 1985"
YEAR_PATTERN = re.compile(r" [12][0-9]{3}\b")

# Tabs and line breaks inside a value would shift columns or split the row
FIELD_BREAK_PATTERN = re.compile(r"[\t\r\n]+")


class RowContext(NamedTuple):
    entry: TaxonomyEntry
    parent: Optional[TaxonomyEntry]
    grandparent: Optional[TaxonomyEntry]


@dataclass(frozen=True)
class ColumnSpec:
    header: str
    enabled: Callable[[ConverterOptions], bool]
    value: Callable[["TaxonomyTableWriter", RowContext], str]


def _always(options: ConverterOptions) -> bool:
    return True


def _ancestor_name(writer: "TaxonomyTableWriter", ancestor: Optional[TaxonomyEntry]) -> str:
    return writer.null_value if ancestor is None else ancestor.name


def _ancestor_id(writer: "TaxonomyTableWriter", ancestor: Optional[TaxonomyEntry]) -> str:
    return writer.null_value if ancestor is None else str(ancestor.identifier)


TAXONOMY_INFO_COLUMN_SPECS: List[ColumnSpec] = [
    ColumnSpec(
        TAXONOMY_INFO_COLUMNS["term_pk"],
        _always,
        lambda w, row: f"{row.entry.identifier}{w.options.key_suffix}",
    ),
    ColumnSpec(TAXONOMY_INFO_COLUMNS["term_name"], _always, lambda w, row: row.entry.name),
    ColumnSpec(TAXONOMY_INFO_COLUMNS["identifier"], _always, lambda w, row: str(row.entry.identifier)),
    ColumnSpec(TAXONOMY_INFO_COLUMNS["is_leaf"], _always, lambda w, row: "1" if row.entry.is_leaf else "0"),
    ColumnSpec(
        TAXONOMY_INFO_COLUMNS["rank"],
        lambda o: o.include_rank,
        lambda w, row: w.value_or_null(row.entry.rank),
    ),
    ColumnSpec(
        TAXONOMY_INFO_COLUMNS["parent_name"],
        lambda o: o.parent_terms_enabled,
        lambda w, row: _ancestor_name(w, row.parent),
    ),
    ColumnSpec(
        TAXONOMY_INFO_COLUMNS["parent_id"],
        lambda o: o.parent_terms_enabled,
        lambda w, row: _ancestor_id(w, row.parent),
    ),
    ColumnSpec(
        TAXONOMY_INFO_COLUMNS["grandparent_name"],
        lambda o: o.include_grandparent_terms,
        lambda w, row: _ancestor_name(w, row.grandparent),
    ),
    ColumnSpec(
        TAXONOMY_INFO_COLUMNS["grandparent_id"],
        lambda o: o.include_grandparent_terms,
        lambda w, row: _ancestor_id(w, row.grandparent),
    ),
    ColumnSpec(
        TAXONOMY_INFO_COLUMNS["common_name"],
        lambda o: o.include_common_name,
        lambda w, row: w.value_or_null(row.entry.common_name),
    ),
    ColumnSpec(
        TAXONOMY_INFO_COLUMNS["synonym"],
        lambda o: o.include_synonym,
        lambda w, row: w.value_or_null(row.entry.synonym),
    ),
    ColumnSpec(
        TAXONOMY_INFO_COLUMNS["mnemonic"],
        lambda o: o.include_mnemonic,
        lambda w, row: w.value_or_null(row.entry.mnemonic),
    ),
]


class TaxonomyTableWriter:
    """Project taxonomy entries onto rows and write them to disk."""

    def __init__(self, options: ConverterOptions) -> None:
        self.options = options
        self.null_value = options.null_value_flag
        self.columns = [spec for spec in TAXONOMY_INFO_COLUMN_SPECS if spec.enabled(options)]

    # ------------------------------------------------------------------
    # Row construction
    # ------------------------------------------------------------------
    def header(self) -> List[str]:
        return [spec.header for spec in self.columns]

    def resolve_row(self, entry: TaxonomyEntry, taxonomy_entries: Dict[int, TaxonomyEntry]) -> RowContext:
        parent = None
        grandparent = None

        if self.options.parent_terms_enabled and entry.parent_term_id != NO_PARENT_ID:
            parent = get_ancestor(taxonomy_entries, entry.parent_term_id, self.null_value)

            if self.options.include_grandparent_terms:
                grandparent = get_grandparent(taxonomy_entries, parent, self.null_value)

        return RowContext(entry, parent, grandparent)

    def build_row(self, entry: TaxonomyEntry, taxonomy_entries: Dict[int, TaxonomyEntry]) -> List[str]:
        row = self.resolve_row(entry, taxonomy_entries)
        return [spec.value(self, row) for spec in self.columns]

    def value_or_null(self, text: Optional[str]) -> str:
        if text is None or not text.strip():
            return self.null_value
        return text

    def format_line(self, values: List[str], column_count: int) -> str:
        """Pad, escape and flatten ``values`` into a single tab-delimited line."""

        fields = list(values)
        if self.null_value.strip():
            fields.extend([self.null_value] * (column_count - len(fields)))

        if self.options.format_for_postgres:
            # Backslashes would otherwise be read as COPY escape sequences
            fields = [field if field == POSTGRES_NULL_VALUE else field.replace("\\", "\\\\") for field in fields]

        fields = [FIELD_BREAK_PATTERN.sub(" ", field) for field in fields]

        return "\t".join(fields)

    def iter_other_names(self, entry: TaxonomyEntry) -> Iterator[str]:
        """Yield alternate names, skipping year-suffixed repeats of the previous name.

        For example "Sarcobium Drozanski 1991" is dropped when "Sarcobium"
        was the last name written for the same term.
        """

        previous: Optional[str] = None
        for other_name in entry.sorted_other_names():
            if previous is not None and other_name.startswith(previous) and YEAR_PATTERN.search(other_name):
                continue
            previous = other_name
            yield other_name

    # ------------------------------------------------------------------
    # File output
    # ------------------------------------------------------------------
    def write_taxonomy_info(self, taxonomy_entries: Dict[int, TaxonomyEntry], output_path: Path) -> bool:
        """Write one row per entry; returns False if the file could not be written."""

        try:
            logger.info("Creating %s", output_path)

            column_headers = self.header()
            column_count = len(column_headers)

            with Path(output_path).open("w", encoding="utf-8") as writer:
                writer.write("\t".join(column_headers) + "\n")

                for entry in taxonomy_entries.values():
                    values = self.build_row(entry, taxonomy_entries)
                    writer.write(self.format_line(values, column_count) + "\n")

            return True
        except (OSError, UnicodeError):
            logger.exception("Error occurred in write_taxonomy_info")
            return False

    def write_other_names(self, taxonomy_entries: Dict[int, TaxonomyEntry], output_path: Path) -> bool:
        """Write one row per retained alternate name."""

        try:
            logger.info("Creating %s", output_path)

            column_count = len(OTHER_NAMES_COLUMNS)

            with Path(output_path).open("w", encoding="utf-8") as writer:
                writer.write("\t".join(OTHER_NAMES_COLUMNS) + "\n")

                for entry in taxonomy_entries.values():
                    identifier = str(entry.identifier)
                    for other_name in self.iter_other_names(entry):
                        writer.write(self.format_line([identifier, other_name], column_count) + "\n")

            return True
        except (OSError, UnicodeError):
            logger.exception("Error occurred in write_other_names")
            return False
