"""
vocabgraph - load an N-Triples vocabulary and resolve it into a typed graph.

Usage:
    from vocabgraph import GraphResolver, load
    
    resolver = GraphResolver()
    resolver.add_all(load())          # schema.org by default
    graph = resolver.resolve()
    
    for cls in graph.iter_classes(include_deprecated=False):
        print(cls.name, [f.name for f in cls.fields()])
"""

from .config import LoaderConfig
from .errors import (
    ConfigError,
    InheritanceCycleError,
    MissingClassError,
    ParseError,
    SchemaError,
    TransportError,
    VocabularyError,
)
from .graph import GraphResolver, ResolvedGraph, resolve_triples
from .transport import RequestsTransport, Transport, TransportResponse
from .triples import IriTerm, Literal, Triple, load, load_file

__version__ = "0.1.0"

__all__ = [
    'LoaderConfig',
    'ConfigError',
    'InheritanceCycleError',
    'MissingClassError',
    'ParseError',
    'SchemaError',
    'TransportError',
    'VocabularyError',
    'GraphResolver',
    'ResolvedGraph',
    'resolve_triples',
    'RequestsTransport',
    'Transport',
    'TransportResponse',
    'IriTerm',
    'Literal',
    'Triple',
    'load',
    'load_file',
]
