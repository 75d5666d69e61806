"""Processing options for the RDF taxonomy converter."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from rdf_taxonomy.config.vocabulary import (
    DEFAULT_OUTPUT_FILE_SUFFIX,
    DEFAULT_PRIMARY_KEY_SUFFIX,
    NULL_VALUE,
    OTHER_NAMES_FILE_SUFFIX,
    POSTGRES_NULL_VALUE,
)


@dataclass
class ConverterOptions:
    """Options controlling which columns are written and how."""

    input_file_path: Optional[Path] = None
    output_file_path: Optional[Path] = None
    other_names_file_path: Optional[Path] = None

    include_rank: bool = True
    include_parent_terms: bool = True
    include_grandparent_terms: bool = True
    include_common_name: bool = True
    include_synonym: bool = True
    include_mnemonic: bool = True

    save_other_names: bool = False

    # Use \N for nulls and escape backslashes so the file loads with
    # COPY ... CSV HEADER DELIMITER E'\t'
    format_for_postgres: bool = False

    primary_key_suffix: str = DEFAULT_PRIMARY_KEY_SUFFIX

    @property
    def null_value_flag(self) -> str:
        return POSTGRES_NULL_VALUE if self.format_for_postgres else NULL_VALUE

    @property
    def parent_terms_enabled(self) -> bool:
        # Grandparent columns are meaningless without the parent columns
        return self.include_parent_terms or self.include_grandparent_terms

    @property
    def key_suffix(self) -> str:
        if not self.primary_key_suffix or not self.primary_key_suffix.strip():
            return ""
        return self.primary_key_suffix

    def validate(self) -> None:
        """Raise ``ValueError`` if the options cannot be used for a conversion."""

        if self.input_file_path is None or not str(self.input_file_path).strip():
            raise ValueError(f"Input path must be provided and non-empty; {self.input_file_path!r} was provided")

    def resolve_output_path(self) -> Path:
        if self.output_file_path is not None and str(self.output_file_path).strip():
            return Path(self.output_file_path)

        input_path = Path(self.input_file_path)
        return input_path.with_name(input_path.stem + DEFAULT_OUTPUT_FILE_SUFFIX)

    def resolve_other_names_path(self, output_path: Path) -> Path:
        if self.other_names_file_path is not None and str(self.other_names_file_path).strip():
            return Path(self.other_names_file_path)

        extension = output_path.suffix or ".txt"
        return output_path.with_name(output_path.stem + OTHER_NAMES_FILE_SUFFIX + extension)
