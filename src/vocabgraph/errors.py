"""
Exception hierarchy for vocabulary loading and resolution.

Every fatal condition raised by this package derives from VocabularyError,
so callers can stop the whole load with a single except clause. Non-fatal
conditions (duplicate comments, out-of-vocabulary statements) are logged
and never raised.
"""

from typing import Optional


class VocabularyError(Exception):
    """Base class for all fatal vocabulary errors."""


class TransportError(VocabularyError):
    """Retrieval failed: connection error, mid-stream abort or bad status."""
    
    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class ParseError(VocabularyError):
    """A statement did not match the N-Triples grammar or named a bad IRI."""
    
    def __init__(self, message: str, line_number: Optional[int] = None):
        self.message = message
        self.line_number = line_number
        location = f" (line {line_number})" if line_number is not None else ""
        super().__init__(f"ParseError: {message}{location}")


class SchemaError(VocabularyError):
    """Triples are well-formed but inconsistent as a schema."""


class MissingClassError(SchemaError):
    """A triple referenced a class that was never declared."""
    
    def __init__(self, message: str, class_iri: str):
        self.class_iri = class_iri
        super().__init__(message)


class InheritanceCycleError(SchemaError):
    """The subClassOf relation loops back onto itself."""
    
    def __init__(self, cycle: list):
        self.cycle = list(cycle)
        path = " -> ".join(str(c) for c in self.cycle)
        super().__init__(f"Circular inheritance detected: {path}")


class ConfigError(VocabularyError):
    """Invalid configuration file or values."""
