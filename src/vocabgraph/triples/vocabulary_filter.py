"""
Vocabulary membership filter.

Every IRI position of a statement is checked independently:

- vocabulary host (http or https) with a non-empty name: accepted
- vocabulary host with an empty name (a host-root reference): fatal
- RDF/RDFS/OWL namespace terms with a local name: accepted
- anything else, including local files: the whole statement is dropped

A statement reaches the resolver only when all of its IRI positions are
accepted.
"""

import logging
from enum import Enum
from typing import Iterable, Iterator, Optional

from ..constants import VocabularyDefaults
from ..errors import ParseError
from .terms import IriTerm, Literal, ObjectTerm, Triple
from .tokenizer import RawStatement
from .well_known import is_well_known

logger = logging.getLogger(__name__)


class Membership(Enum):
    ACCEPT = "accept"
    DROP = "drop"


class VocabularyFilter:
    """
    Classifies parsed IRIs as in-scope, out-of-scope or malformed.
    
    Args:
        vocabulary_host: Host that in-scope IRIs must belong to.
    """
    
    def __init__(self, vocabulary_host: str = VocabularyDefaults.VOCABULARY_HOST):
        self.vocabulary_host = vocabulary_host.lower()
        self.dropped = 0
    
    def classify(self, term: IriTerm, line_number: Optional[int] = None) -> Membership:
        """
        Classify one IRI.
        
        Raises:
            ParseError: "Unexpected URL" for a vocabulary host-root reference.
        """
        if term.scheme in VocabularyDefaults.NETWORK_SCHEMES and term.host == self.vocabulary_host:
            if not term.name:
                raise ParseError(
                    f"Unexpected URL {term.href} with no room for a name",
                    line_number,
                )
            return Membership.ACCEPT
        
        if is_well_known(term):
            return Membership.ACCEPT
        return Membership.DROP
    
    def to_triple(self, statement: RawStatement) -> Optional[Triple]:
        """
        Turn a raw statement into a Triple, or None if it is out of scope.
        
        All positions are classified before deciding, so a host-root
        reference is fatal even when a sibling position would be dropped.
        
        Raises:
            ParseError: On a malformed IRI or literal.
        """
        line = statement.line_number
        try:
            subject = IriTerm.parse(statement.subject)
            predicate = IriTerm.parse(statement.predicate)
            obj: ObjectTerm
            if statement.object_is_iri:
                obj = IriTerm.parse(statement.object)
            else:
                literal = Literal.parse(statement.object)
                if literal is None:
                    raise ParseError(f"Unexpected object {statement.object}", line)
                obj = literal
        except ParseError as e:
            if e.line_number is not None:
                raise
            raise ParseError(e.message, line) from e
        
        iris = [subject, predicate] + ([obj] if isinstance(obj, IriTerm) else [])
        verdicts = [self.classify(iri, line) for iri in iris]
        if any(v is Membership.DROP for v in verdicts):
            self.dropped += 1
            logger.debug(f"Dropping out-of-vocabulary statement on line {line}")
            return None
        
        return Triple(subject, predicate, obj)
    
    def filter(self, statements: Iterable[RawStatement]) -> Iterator[Triple]:
        """Lazily convert statements, skipping the out-of-scope ones."""
        for statement in statements:
            triple = self.to_triple(statement)
            if triple is not None:
                yield triple
