"""Pytest configuration and shared fixtures."""
import io
import tempfile
from pathlib import Path

import pytest

from rdf_taxonomy.parser import RDFTaxonomyParser

RDF_HEADER = """<?xml version="1.0" encoding="UTF-8"?>
<rdf:RDF xml:base="http://purl.uniprot.org/taxonomy/"
         xmlns="http://purl.uniprot.org/core/"
         xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"
         xmlns:rdfs="http://www.w3.org/2000/01/rdf-schema#"
         xmlns:foaf="http://xmlns.com/foaf/0.1/">
"""

RDF_FOOTER = "</rdf:RDF>\n"


def rdf_document(body):
    """Wrap description blocks in an rdf:RDF root element."""
    return RDF_HEADER + body + RDF_FOOTER


def taxon_block(identifier, name=None, rank=None, parent=None, common_name=None,
                synonym=None, mnemonic=None, other_names=(), entry_type="Taxon"):
    """Build one rdf:Description block the way UniProt writes them."""
    lines = [f'<rdf:Description rdf:about="{identifier}">',
             f'  <rdf:type rdf:resource="http://purl.uniprot.org/core/{entry_type}"/>']
    if rank is not None:
        lines.append(f'  <rank rdf:resource="http://purl.uniprot.org/core/{rank}"/>')
    if mnemonic is not None:
        lines.append(f"  <mnemonic>{mnemonic}</mnemonic>")
    if name is not None:
        lines.append(f"  <scientificName>{name}</scientificName>")
    if common_name is not None:
        lines.append(f"  <commonName>{common_name}</commonName>")
    if synonym is not None:
        lines.append(f"  <synonym>{synonym}</synonym>")
    for other_name in other_names:
        lines.append(f"  <otherName>{other_name}</otherName>")
    if parent is not None:
        lines.append(f'  <rdfs:subClassOf rdf:resource="{parent}"/>')
    lines.append("</rdf:Description>")
    return "\n".join(lines) + "\n"


SAMPLE_TAXONOMY = rdf_document(
    taxon_block(131567, name="cellular organisms", parent="http://purl.uniprot.org/core/Taxon")
    + taxon_block(2759, name="Eukaryota", rank="Superkingdom", mnemonic="9EUKA",
                  parent="131567", common_name="eucaryotes")
    + taxon_block(9605, name="Homo", rank="Genus", mnemonic="9HOMO", parent="2759")
    + taxon_block(9606, name="Homo sapiens", rank="Species", mnemonic="HUMAN", parent="9605",
                  common_name="Human", other_names=("Homo sapiens Linnaeus, 1758", "human"))
    + taxon_block(10090, name="Mus musculus", rank="Species", mnemonic="MOUSE",
                  parent="http://purl.uniprot.org/core/Taxon",
                  other_names=("Mus musculus", "House mouse"))
    + taxon_block("10090/strain/C57BL", name="C57BL", entry_type="Strain")
)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def parse_rdf():
    """Parse an RDF body into a dictionary of entries."""
    def _parse(body, **kwargs):
        entries = {}
        parser = RDFTaxonomyParser(**kwargs)
        parser.parse(io.BytesIO(rdf_document(body).encode("utf-8")), entries)
        return entries, parser
    return _parse


@pytest.fixture
def sample_rdf_file(temp_dir):
    """Write the sample taxonomy to disk."""
    path = temp_dir / "taxonomy.rdf"
    path.write_text(SAMPLE_TAXONOMY, encoding="utf-8")
    return path
