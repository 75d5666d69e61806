"""Convert UniProt RDF/XML taxonomy files into tab-delimited tables."""

__version__ = "1.0.0"
