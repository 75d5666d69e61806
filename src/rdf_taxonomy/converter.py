#!/usr/bin/env python3
"""UniProt taxonomy RDF/XML → tab-delimited table converter.

Reads an RDF taxonomy file (for example ``taxonomy.rdf`` from
https://ftp.uniprot.org/pub/databases/uniprot/current_release/rdf/) and
writes one row per taxonomy term, optionally with rank, parent and
grandparent columns, plus an optional second file listing alternate names.
The output is intended for bulk loading into SQL Server or PostgreSQL.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from rdf_taxonomy import __version__
from rdf_taxonomy.config.vocabulary import DEFAULT_PRIMARY_KEY_SUFFIX
from rdf_taxonomy.entry import TaxonomyEntry
from rdf_taxonomy.options import ConverterOptions
from rdf_taxonomy.parser import RDFTaxonomyParser
from rdf_taxonomy.resolver import identify_leaf_terms
from rdf_taxonomy.writer import TaxonomyTableWriter

logger = logging.getLogger(__name__)


class TaxonomyConverter:
    """Convert an RDF taxonomy file into tab-delimited text."""

    def __init__(self, options: ConverterOptions) -> None:
        self.options = options
        self.taxonomy_entries: Dict[int, TaxonomyEntry] = {}
        self.leaf_count = 0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def process_file(self) -> bool:
        """Resolve input and output paths, then convert.  Returns True on success."""

        input_file = Path(self.options.input_file_path)
        if not input_file.is_file():
            logger.warning("File not found: %s", input_file.resolve())
            return False

        logger.info("Input file:  %s", input_file.resolve())

        output_file = self.options.resolve_output_path()
        logger.info("Output file: %s", output_file.resolve())

        if output_file.exists():
            logger.warning("Existing file will be overwritten")

        return self.convert(input_file, output_file)

    def convert(self, input_file: Path, output_file: Path) -> bool:
        self.taxonomy_entries = {}

        try:
            parser = RDFTaxonomyParser(null_value=self.options.null_value_flag)
            parser.parse(input_file, self.taxonomy_entries)
        except Exception:
            logger.exception("Error occurred in convert while reading %s", input_file)
            return False

        self.leaf_count = identify_leaf_terms(self.taxonomy_entries)

        logger.info(
            "Found %s taxonomy entries, of which %s are leaf nodes",
            f"{len(self.taxonomy_entries):,}",
            f"{self.leaf_count:,}",
        )

        writer = TaxonomyTableWriter(self.options)

        if not writer.write_taxonomy_info(self.taxonomy_entries, output_file):
            logger.warning("Error creating file %s", output_file)
            return False

        if self.options.save_other_names:
            other_names_file = self.options.resolve_other_names_path(output_file)
            if not writer.write_other_names(self.taxonomy_entries, other_names_file):
                logger.warning("Error creating file %s", other_names_file)
                return False

        logger.info("Conversion is complete")
        return True


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Convert a UniProt RDF taxonomy file into a tab-delimited text file of taxonomy terms",
    )
    parser.add_argument("input_file", type=Path, help="Path to the RDF/XML taxonomy file")
    parser.add_argument(
        "-o",
        "--output",
        dest="output_file",
        type=Path,
        default=None,
        help="Output file; defaults to <input name>_info.txt beside the input file",
    )
    parser.add_argument(
        "--other-names-output",
        dest="other_names_file",
        type=Path,
        default=None,
        help="Alternate names file; defaults to <output name>_OtherNames.txt",
    )
    parser.add_argument(
        "--save-other-names",
        action="store_true",
        help="Also write the alternate names of each term to a second file",
    )
    parser.add_argument(
        "--postgres",
        action="store_true",
        help=r"Use \N for null values and escape backslashes, for use with the PostgreSQL COPY command",
    )
    parser.add_argument(
        "--primary-key-suffix",
        default=DEFAULT_PRIMARY_KEY_SUFFIX,
        help=f"Text appended to the identifier in the Term_PK column (default: {DEFAULT_PRIMARY_KEY_SUFFIX})",
    )
    parser.add_argument("--no-rank", action="store_true", help="Omit the Rank column")
    parser.add_argument(
        "--no-parents",
        action="store_true",
        help="Omit the parent term columns (only honored together with --no-grandparents)",
    )
    parser.add_argument("--no-grandparents", action="store_true", help="Omit the grandparent term columns")
    parser.add_argument("--no-common-name", action="store_true", help="Omit the Common_Name column")
    parser.add_argument("--no-synonym", action="store_true", help="Omit the Synonym column")
    parser.add_argument("--no-mnemonic", action="store_true", help="Omit the Mnemonic column")

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Show debug messages")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only show warnings and errors")

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def options_from_args(args: argparse.Namespace) -> ConverterOptions:
    return ConverterOptions(
        input_file_path=args.input_file,
        output_file_path=args.output_file,
        other_names_file_path=args.other_names_file,
        include_rank=not args.no_rank,
        include_parent_terms=not args.no_parents,
        include_grandparent_terms=not args.no_grandparents,
        include_common_name=not args.no_common_name,
        include_synonym=not args.no_synonym,
        include_mnemonic=not args.no_mnemonic,
        save_other_names=args.save_other_names,
        format_for_postgres=args.postgres,
        primary_key_suffix=args.primary_key_suffix,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="[%(levelname)s] %(message)s",
    )

    options = options_from_args(args)
    try:
        options.validate()
    except ValueError as exc:
        logger.error("%s", exc)
        return 1

    converter = TaxonomyConverter(options)
    success = converter.process_file()

    return 0 if success else 1


if __name__ == "__main__":  # pragma: no cover - CLI entry point.
    sys.exit(main())
