# Lookup tables for the UniProt taxonomy RDF/XML dialect
DESCRIPTION_ELEMENT = "Description"
TYPE_ELEMENT = "type"
ABOUT_ATTRIBUTE = "about"
RESOURCE_ATTRIBUTE = "resource"

RANK_ELEMENT = "rank"
PARENT_ELEMENT = "subClassOf"
OTHER_NAME_ELEMENT = "otherName"

# Text elements that overwrite a scalar field on TaxonomyEntry
SCALAR_TEXT_ELEMENTS = {
    "mnemonic": "mnemonic",
    "scientificName": "name",
    "commonName": "common_name",
    "synonym": "synonym",
}

# rdf:type values that never become taxonomy entries
# (unofficial strains, foaf:Image thumbnails)
EXCLUDED_ENTRY_TYPES = {"strain", "image"}

# Matched case-insensitively anywhere in the resource so http/https both work
TOP_LEVEL_CLASS_MARKER = "purl.uniprot.org/core/Taxon"

ROOT_TERM_ID = 1
ROOT_TERM_NAME = "root"
NO_PARENT_ID = 0

DEFAULT_PRIMARY_KEY_SUFFIX = "NEWT1"

NULL_VALUE = ""
POSTGRES_NULL_VALUE = "\\N"

TAXONOMY_INFO_COLUMNS = {
    "term_pk": "Term_PK",
    "term_name": "Term_Name",
    "identifier": "Identifier",
    "is_leaf": "Is_Leaf",
    "rank": "Rank",
    "parent_name": "Parent_Term_Name",
    "parent_id": "Parent_Term_ID",
    "grandparent_name": "Grandparent_Term_Name",
    "grandparent_id": "Grandparent_Term_ID",
    "common_name": "Common_Name",
    "synonym": "Synonym",
    "mnemonic": "Mnemonic",
}

OTHER_NAMES_COLUMNS = ["Identifier", "Other_Name"]

OTHER_NAMES_FILE_SUFFIX = "_OtherNames"
DEFAULT_OUTPUT_FILE_SUFFIX = "_info.txt"
