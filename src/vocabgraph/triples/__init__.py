"""
Triples package - N-Triples ingestion components.

Components:
- terms: IriTerm, Literal and Triple value types
- tokenizer: chunk-tolerant statement tokenizer
- well_known: fixed RDF/RDFS/schema.org lookups and predicate classification
- vocabulary_filter: in-scope / dropped / fatal IRI classification
- reader: lazy network and file loaders
"""

from .terms import IriTerm, Literal, ObjectTerm, Triple, format_triple
from .tokenizer import RawStatement, StatementTokenizer, tokenize
from .vocabulary_filter import Membership, VocabularyFilter
from .well_known import PredicateKind, classify_predicate
from .reader import load, load_file

__all__ = [
    'IriTerm',
    'Literal',
    'ObjectTerm',
    'Triple',
    'format_triple',
    'RawStatement',
    'StatementTokenizer',
    'tokenize',
    'Membership',
    'VocabularyFilter',
    'PredicateKind',
    'classify_predicate',
    'load',
    'load_file',
]
