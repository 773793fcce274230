"""
Term model for N-Triples statements.

Components:
- IriTerm: an absolute IRI, decomposed into scheme, host, path and name
- Literal: a quoted string value with its escapes decoded
- Triple: one validated (Subject, Predicate, Object) statement

Terms are immutable and compare by their canonical string form, so they can
be used as dictionary keys and sorted deterministically.
"""

import re
from dataclasses import dataclass, field
from typing import Optional, Union
from urllib.parse import urlsplit

from rdflib.exceptions import ParserError
from rdflib.plugins.parsers.ntriples import unquote

from ..errors import ParseError

_ESCAPE_SEQUENCE = re.compile(r'\\(?:u[0-9A-Fa-f]{4}|U[0-9A-Fa-f]{8}|.)?', re.DOTALL)
_VALID_ESCAPE = re.compile(r'\\(?:[tbnrf"\'\\]|u[0-9A-Fa-f]{4}|U[0-9A-Fa-f]{8})')

_LITERAL_PATTERN = re.compile(
    r'^"(?P<body>(?:[^"\\]|\\.)*)"'
    r'(?:@(?P<language>[A-Za-z]+(?:-[A-Za-z0-9]+)*)|\^\^<(?P<datatype>[^<>"\s]+)>)?$',
    re.DOTALL,
)


@dataclass(frozen=True, order=True)
class IriTerm:
    """
    An IRI-identified vocabulary node (class, property, or individual).
    
    Attributes:
        href: Canonical absolute IRI string. Equality and ordering use it alone.
        scheme: URI scheme, lower-cased (e.g. "https", "file").
        host: Network host, lower-cased; empty for non-network schemes.
        path: Path component of the IRI.
        name: The name segment: the fragment when present, otherwise the
            last path segment. Empty for a host-root reference.
    
    Example:
        >>> term = IriTerm.parse("https://schema.org/Person")
        >>> term.host, term.name
        ('schema.org', 'Person')
    """
    href: str
    scheme: str = field(default="", compare=False)
    host: str = field(default="", compare=False)
    path: str = field(default="", compare=False)
    name: str = field(default="", compare=False)
    
    @classmethod
    def parse(cls, raw: str) -> 'IriTerm':
        """
        Build an IriTerm from an IRI string, with or without angle brackets.
        
        Raises:
            ParseError: If the string is not an absolute IRI.
        """
        href = raw[1:-1] if raw.startswith('<') and raw.endswith('>') else raw
        try:
            parts = urlsplit(href)
        except ValueError as e:
            raise ParseError(f"Unexpected IRI {href}: {e}")
        
        if not parts.scheme:
            raise ParseError(f"Unexpected relative IRI {href}")
        
        if '#' in href:
            name = parts.fragment
        else:
            name = parts.path.rsplit('/', 1)[-1]
        
        return cls(
            href=href,
            scheme=parts.scheme.lower(),
            host=(parts.hostname or '').lower(),
            path=parts.path,
            name=name,
        )
    
    @property
    def namespace(self) -> str:
        """The IRI with its name segment removed."""
        if self.name and self.href.endswith(self.name):
            return self.href[:-len(self.name)]
        return self.href
    
    def __str__(self) -> str:
        return self.href


@dataclass(frozen=True, order=True)
class Literal:
    """
    A quoted scalar value appearing as a triple's object.
    
    Attributes:
        raw: The literal exactly as written, quotes included (canonical form).
        value: The unescaped string content.
        language: Optional language tag (``"text"@en``).
        datatype: Optional datatype IRI string (``"1"^^<...#int>``).
    """
    raw: str
    value: str = field(default="", compare=False)
    language: Optional[str] = field(default=None, compare=False)
    datatype: Optional[str] = field(default=None, compare=False)
    
    @classmethod
    def parse(cls, raw: str) -> Optional['Literal']:
        """
        Build a Literal from its quoted N-Triples form.
        
        Returns:
            The Literal, or None if ``raw`` is not a quoted literal.
        
        Raises:
            ParseError: If the literal contains an invalid escape sequence.
        """
        match = _LITERAL_PATTERN.match(raw)
        if not match:
            return None
        
        body = match.group('body')
        for escape in _ESCAPE_SEQUENCE.finditer(body):
            if not _VALID_ESCAPE.fullmatch(escape.group(0)):
                raise ParseError(f"Unexpected escape sequence {escape.group(0)!r} in literal {raw}")
        
        try:
            value = unquote(body)
        except ParserError as e:
            raise ParseError(f"Unexpected escape sequence in literal {raw}: {e}")
        
        return cls(
            raw=raw,
            value=value,
            language=match.group('language'),
            datatype=match.group('datatype'),
        )
    
    def __str__(self) -> str:
        return self.raw


ObjectTerm = Union[IriTerm, Literal]


@dataclass(frozen=True)
class Triple:
    """A validated (Subject, Predicate, Object) fact."""
    subject: IriTerm
    predicate: IriTerm
    object: ObjectTerm
    
    def __str__(self) -> str:
        return format_triple(self)


def format_triple(triple: Triple) -> str:
    """Render a triple back into its single-line statement form."""
    obj = f"<{triple.object}>" if isinstance(triple.object, IriTerm) else str(triple.object)
    return f"<{triple.subject}> <{triple.predicate}> {obj} ."
