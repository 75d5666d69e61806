"""In-memory representation of a single taxonomy term."""

from __future__ import annotations

from typing import List, Set

from rdf_taxonomy.config.vocabulary import NO_PARENT_ID, NULL_VALUE


class TaxonomyEntry:
    """One taxonomic term read from an ``rdf:Description`` block.

    ``mnemonic`` is the five letter UniProt code for the organism, for
    example ``MOUSE`` for *Mus musculus* or ``CANLF`` for *Canis lupus
    familiaris*.  ``parent_term_id`` is 0 when no parent was seen and 1
    when the term sits directly below the root (cellular organisms,
    viruses, unclassified sequences and so on).
    """

    def __init__(self, identifier: int, null_value: str = NULL_VALUE) -> None:
        self._identifier = identifier

        self.name = null_value
        self.common_name = null_value
        self.synonym = null_value
        self.mnemonic = null_value
        self.rank = null_value

        self.other_names: Set[str] = set()
        self.is_leaf = False
        self.parent_term_id = NO_PARENT_ID

    @property
    def identifier(self) -> int:
        return self._identifier

    def add_alternate_name(self, other_name: str) -> None:
        """Record an alternate name, ignoring blank values."""

        if other_name is None or not other_name.strip():
            return
        self.other_names.add(other_name)

    def sorted_other_names(self) -> List[str]:
        return sorted(self.other_names)

    def __repr__(self) -> str:
        return f"TaxonomyEntry({self._identifier!r}, name={self.name!r})"

    def __str__(self) -> str:
        return f"{self._identifier}: {self.name}"
