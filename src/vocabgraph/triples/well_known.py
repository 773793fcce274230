"""
Well-known vocabulary lookups.

Fixed tables of the RDF/RDFS/OWL and schema.org terms the resolver needs.
Schema.org terms are matched under both the http and https namespaces,
since published dumps have used either.

Predicates are classified once, at ingest, into a PredicateKind tag so the
resolver can dispatch on it with a single match.
"""

from enum import Enum
from typing import FrozenSet, Optional

from rdflib import OWL, RDF, RDFS, Namespace

from .terms import IriTerm, Literal, ObjectTerm

SCHEMA_HTTP = Namespace("http://schema.org/")
SCHEMA_HTTPS = Namespace("https://schema.org/")

WELL_KNOWN_NAMESPACES: FrozenSet[str] = frozenset({str(RDF), str(RDFS), str(OWL)})


def _schema_term(name: str) -> FrozenSet[str]:
    return frozenset({str(SCHEMA_HTTP[name]), str(SCHEMA_HTTPS[name])})


_TYPE = frozenset({str(RDF.type)})
_COMMENT = frozenset({str(RDFS.comment)})
_SUBCLASS_OF = frozenset({str(RDFS.subClassOf)})
_DOMAIN_INCLUDES = _schema_term("domainIncludes")
_RANGE_INCLUDES = _schema_term("rangeIncludes")
_SUPERSEDED_BY = _schema_term("supersededBy")

_CLASS_TYPES = frozenset({str(RDFS.Class)})
_DATA_TYPES = _schema_term("DataType")
_PROPERTY_TYPES = frozenset({str(RDF.Property)})


class PredicateKind(Enum):
    """Tagged classification of a statement's predicate."""
    TYPE = "type"
    COMMENT = "comment"
    SUBCLASS_OF = "subClassOf"
    DOMAIN_INCLUDES = "domainIncludes"
    RANGE_INCLUDES = "rangeIncludes"
    SUPERSEDED_BY = "supersededBy"
    OTHER = "other"


_PREDICATE_KINDS = {
    **{href: PredicateKind.TYPE for href in _TYPE},
    **{href: PredicateKind.COMMENT for href in _COMMENT},
    **{href: PredicateKind.SUBCLASS_OF for href in _SUBCLASS_OF},
    **{href: PredicateKind.DOMAIN_INCLUDES for href in _DOMAIN_INCLUDES},
    **{href: PredicateKind.RANGE_INCLUDES for href in _RANGE_INCLUDES},
    **{href: PredicateKind.SUPERSEDED_BY for href in _SUPERSEDED_BY},
}


def classify_predicate(predicate: IriTerm) -> PredicateKind:
    return _PREDICATE_KINDS.get(predicate.href, PredicateKind.OTHER)


def is_type_assertion(predicate: IriTerm) -> bool:
    return predicate.href in _TYPE


def is_domain_includes(predicate: IriTerm) -> bool:
    return predicate.href in _DOMAIN_INCLUDES


def is_range_includes(predicate: IriTerm) -> bool:
    return predicate.href in _RANGE_INCLUDES


def is_superseded_by(predicate: IriTerm) -> bool:
    return predicate.href in _SUPERSEDED_BY


def is_class_type(term: ObjectTerm) -> bool:
    """True if ``term`` declares its subject to be a Class."""
    return isinstance(term, IriTerm) and term.href in _CLASS_TYPES


def is_data_type(term: ObjectTerm) -> bool:
    """True if ``term`` declares its subject to be a DataType."""
    return isinstance(term, IriTerm) and term.href in _DATA_TYPES


def is_property_type(term: ObjectTerm) -> bool:
    """True if ``term`` declares its subject to be a Property."""
    return isinstance(term, IriTerm) and term.href in _PROPERTY_TYPES


def get_comment(predicate: IriTerm, obj: ObjectTerm) -> Optional[str]:
    """Return the comment text if this predicate/object pair is a comment."""
    if predicate.href in _COMMENT and isinstance(obj, Literal):
        return obj.value
    return None


def is_well_known(term: IriTerm) -> bool:
    """True if ``term`` lives in the RDF, RDFS or OWL namespace."""
    return bool(term.name) and term.namespace in WELL_KNOWN_NAMESPACES
