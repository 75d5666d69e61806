"""Leaf detection and ancestor lookups over a parsed taxonomy."""

from __future__ import annotations

from typing import Dict, Optional, Set

from rdf_taxonomy.config.vocabulary import NULL_VALUE, ROOT_TERM_ID, ROOT_TERM_NAME
from rdf_taxonomy.entry import TaxonomyEntry


def identify_leaf_terms(taxonomy_entries: Dict[int, TaxonomyEntry]) -> int:
    """Set ``is_leaf`` on every entry and return the number of leaf terms.

    An entry is a leaf when no other entry names it as its parent.  Must be
    called once the whole file has been read.
    """

    parent_ids: Set[int] = {entry.parent_term_id for entry in taxonomy_entries.values()}

    leaf_count = 0
    for identifier, entry in taxonomy_entries.items():
        entry.is_leaf = identifier not in parent_ids
        if entry.is_leaf:
            leaf_count += 1

    return leaf_count


def get_ancestor(
    taxonomy_entries: Dict[int, TaxonomyEntry],
    ancestor_id: int,
    null_value: str = NULL_VALUE,
) -> Optional[TaxonomyEntry]:
    """Return the entry for ``ancestor_id``, synthesizing the root term if needed."""

    ancestor = taxonomy_entries.get(ancestor_id)
    if ancestor is not None:
        return ancestor

    if ancestor_id == ROOT_TERM_ID:
        root = TaxonomyEntry(ROOT_TERM_ID, null_value)
        root.name = ROOT_TERM_NAME
        return root

    return None


def get_grandparent(
    taxonomy_entries: Dict[int, TaxonomyEntry],
    parent: Optional[TaxonomyEntry],
    null_value: str = NULL_VALUE,
) -> Optional[TaxonomyEntry]:
    if parent is None or parent.parent_term_id < ROOT_TERM_ID:
        return None
    return get_ancestor(taxonomy_entries, parent.parent_term_id, null_value)
