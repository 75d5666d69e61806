"""Forward-only parser for UniProt taxonomy RDF/XML.

The file is a flat list of ``rdf:Description`` blocks, one per taxonomy
term::

    <rdf:Description rdf:about="9606">
      <rdf:type rdf:resource="http://purl.uniprot.org/core/Taxon"/>
      <rank rdf:resource="http://purl.uniprot.org/core/Species"/>
      <mnemonic>HUMAN</mnemonic>
      <scientificName>Homo sapiens</scientificName>
      <commonName>Human</commonName>
      <rdfs:subClassOf rdf:resource="9605"/>
    </rdf:Description>

Blocks are consumed from an lxml ``iterparse`` event stream and released as
soon as they close, so full-size dumps never have to fit in memory.
Elements and attributes are matched on their local name only.
"""

from __future__ import annotations

import logging
import re
import time
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Dict, Optional, Union

from lxml import etree

from rdf_taxonomy.config.vocabulary import (
    ABOUT_ATTRIBUTE,
    DESCRIPTION_ELEMENT,
    EXCLUDED_ENTRY_TYPES,
    NULL_VALUE,
    OTHER_NAME_ELEMENT,
    PARENT_ELEMENT,
    RANK_ELEMENT,
    RESOURCE_ATTRIBUTE,
    ROOT_TERM_ID,
    SCALAR_TEXT_ELEMENTS,
    TOP_LEVEL_CLASS_MARKER,
    TYPE_ELEMENT,
)
from rdf_taxonomy.entry import TaxonomyEntry

logger = logging.getLogger(__name__)

STATUS_INTERVAL_SECONDS = 2.0

_INTEGER_PATTERN = re.compile(r"^\s*[+-]?[0-9]+\s*$")

XmlSource = Union[str, Path, BinaryIO]


class ParserState(Enum):
    IDLE = "idle"
    AWAITING_TYPE_MARKER = "awaiting_type_marker"
    IN_BLOCK = "in_block"


class RDFTaxonomyParser:
    """Populate a dictionary of :class:`TaxonomyEntry` objects from RDF/XML."""

    def __init__(
        self,
        *,
        null_value: str = NULL_VALUE,
        status_interval: float = STATUS_INTERVAL_SECONDS,
    ) -> None:
        self.null_value = null_value
        self.status_interval = status_interval

        self.state = ParserState.IDLE
        self.description_count = 0

        self._pending_identifier: Optional[str] = None
        self._current_entry: Optional[TaxonomyEntry] = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def parse(self, source: XmlSource, taxonomy_entries: Dict[int, TaxonomyEntry]) -> int:
        """Read every description block in ``source`` into ``taxonomy_entries``.

        Malformed or out-of-scope blocks are skipped with a warning.  XML
        syntax errors and I/O errors propagate to the caller.  Returns the
        number of description blocks seen.
        """

        if isinstance(source, Path):
            source = str(source)

        self.state = ParserState.IDLE
        self.description_count = 0
        self._pending_identifier = None
        self._current_entry = None

        start_time = time.monotonic()
        last_status = start_time

        # huge_tree lifts the text-node size limits for full UniProt dumps; entity
        # expansion stays off since the dump declares no entities
        context = etree.iterparse(
            source,
            events=("start", "end"),
            remove_comments=True,
            remove_pis=True,
            resolve_entities=False,
            huge_tree=True,
        )

        for event, element in context:
            if not isinstance(element.tag, str):
                continue

            local_name = etree.QName(element).localname

            if event == "start":
                self._handle_start(local_name, element, taxonomy_entries)

                if local_name == DESCRIPTION_ELEMENT:
                    now = time.monotonic()
                    if now - last_status >= self.status_interval:
                        last_status = now
                        logger.info(
                            "Processed %s entries; %s",
                            f"{self.description_count:,}",
                            format_elapsed_time(now - start_time),
                        )
            else:
                self._handle_end(local_name, element)

        return self.description_count

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------
    def _handle_start(
        self,
        local_name: str,
        element: etree._Element,
        taxonomy_entries: Dict[int, TaxonomyEntry],
    ) -> None:
        if self.state is ParserState.IN_BLOCK:
            if local_name == RANK_ELEMENT:
                self._read_rank(element)
            elif local_name == PARENT_ELEMENT:
                self._read_parent(element)
            return

        if local_name == DESCRIPTION_ELEMENT:
            self._start_description(element)
        elif local_name == TYPE_ELEMENT and self.state is ParserState.AWAITING_TYPE_MARKER:
            self._read_entry_type(element, taxonomy_entries)

    def _handle_end(self, local_name: str, element: etree._Element) -> None:
        if self.state is ParserState.IN_BLOCK and self._current_entry is not None:
            field_name = SCALAR_TEXT_ELEMENTS.get(local_name)
            if field_name is not None:
                setattr(self._current_entry, field_name, element_text(element))
            elif local_name == OTHER_NAME_ELEMENT:
                self._current_entry.add_alternate_name(element_text(element))
            elif local_name == DESCRIPTION_ELEMENT:
                self.state = ParserState.IDLE
                self._current_entry = None

        if local_name == DESCRIPTION_ELEMENT:
            _release(element)

    def _start_description(self, element: etree._Element) -> None:
        self.description_count += 1
        self._pending_identifier = None

        if not len(element.attrib):
            logger.warning(
                "rdf:Description %s does not have any attributes; skipping",
                self.description_count,
            )
            self.state = ParserState.IDLE
            return

        identifier = get_attribute(element, ABOUT_ATTRIBUTE)
        if identifier is None:
            logger.warning(
                "rdf:Description %s does not have attribute rdf:about",
                self.description_count,
            )
            self.state = ParserState.IDLE
            return

        self._pending_identifier = identifier
        self.state = ParserState.AWAITING_TYPE_MARKER

    def _read_entry_type(self, element: etree._Element, taxonomy_entries: Dict[int, TaxonomyEntry]) -> None:
        self.state = ParserState.IDLE

        if not len(element.attrib):
            logger.warning(
                "rdf:Description %s is not followed by a 'rdf:type' element with attributes; skipping",
                self.description_count,
            )
            return

        resource = get_attribute(element, RESOURCE_ATTRIBUTE)
        if resource is None:
            logger.warning(
                "rdf:Description %s, element 'rdf:type' does not have attribute rdf:resource",
                self.description_count,
            )
            return

        # Strain entries have no official taxonomy identifier; Image entries are foaf thumbnails
        entry_type = value_after_last_slash(resource)
        if entry_type.lower() in EXCLUDED_ENTRY_TYPES:
            return

        identifier = parse_integer(self._pending_identifier)
        if identifier is None:
            logger.warning(
                "rdf:Description %s, element 'rdf:about' does not have a numeric value: %s; skipping",
                self.description_count,
                self._pending_identifier,
            )
            return

        if identifier in taxonomy_entries:
            logger.warning(
                "rdf:Description %s repeats identifier %s; keeping the first definition",
                self.description_count,
                identifier,
            )
            return

        entry = TaxonomyEntry(identifier, self.null_value)
        taxonomy_entries[identifier] = entry

        self._current_entry = entry
        self.state = ParserState.IN_BLOCK

    def _read_rank(self, element: etree._Element) -> None:
        rank = get_attribute(element, RESOURCE_ATTRIBUTE)
        if rank is None:
            logger.warning(
                "rdf:Description %s, element 'rank' does not have attribute 'rdf:resource'",
                self.description_count,
            )
            return

        # e.g. http://purl.uniprot.org/core/Species
        self._current_entry.rank = value_after_last_slash(rank)

    def _read_parent(self, element: etree._Element) -> None:
        parent = get_attribute(element, RESOURCE_ATTRIBUTE)
        if parent is None:
            logger.warning(
                "rdf:Description %s, element 'rdfs:subClassOf' does not have attribute 'rdf:resource'",
                self.description_count,
            )
            return

        if TOP_LEVEL_CLASS_MARKER.lower() in parent.lower():
            self._current_entry.parent_term_id = ROOT_TERM_ID
            return

        parent_term_id = parse_integer(parent)
        if parent_term_id is None:
            logger.warning(
                "rdf:Description %s, element 'rdfs:subClassOf' does not have a numeric value "
                "for the 'rdf:resource' attribute: %s",
                self.description_count,
                parent,
            )
            return

        self._current_entry.parent_term_id = parent_term_id


# ----------------------------------------------------------------------
# Utility helpers
# ----------------------------------------------------------------------
def get_attribute(element: etree._Element, local_name: str) -> Optional[str]:
    """Return the first attribute whose local name matches, ignoring namespaces."""

    for key, value in element.attrib.items():
        if etree.QName(key).localname == local_name:
            return value
    return None


def element_text(element: etree._Element) -> str:
    return element.text if element.text is not None else ""


def value_after_last_slash(text: str) -> str:
    return text.rsplit("/", 1)[-1]


def parse_integer(value: Optional[str]) -> Optional[int]:
    if value is None or not _INTEGER_PATTERN.match(value):
        return None
    return int(value)


def format_elapsed_time(total_seconds: float) -> str:
    if total_seconds <= 60:
        return f"{total_seconds:.0f} seconds elapsed"
    return f"{total_seconds / 60.0:.1f} minutes elapsed"


def _release(element: etree._Element) -> None:
    # Drop the finished block and any earlier siblings still held by the tree
    element.clear()
    parent = element.getparent()
    if parent is None:
        return
    while element.getprevious() is not None:
        del parent[0]
