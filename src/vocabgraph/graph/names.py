"""Display names derived from vocabulary IRIs."""

import re

from ..triples.terms import IriTerm

_INVALID_CHARS = re.compile(r'[^A-Za-z0-9_]')
_VALID_START = re.compile(r'^[A-Za-z_]')


def _sanitize(name: str) -> str:
    cleaned = _INVALID_CHARS.sub('_', name)
    if not _VALID_START.match(cleaned):
        cleaned = '_' + cleaned
    return cleaned


def to_class_name(term: IriTerm) -> str:
    """Identifier-safe name for a class, e.g. ``3DModel`` -> ``_3DModel``."""
    return _sanitize(term.name)


def to_enum_name(term: IriTerm) -> str:
    """Identifier-safe name for an enumeration member."""
    return _sanitize(term.name)


def to_property_name(term: IriTerm) -> str:
    # Property keys are emitted as quoted strings, so no sanitizing.
    return term.name
