"""
Statement tokenizer for N-Triples byte streams.

StatementTokenizer turns arbitrarily fragmented byte chunks into raw
statements. A chunk boundary may fall anywhere: inside a statement, inside a
token, or inside a multi-byte UTF-8 character. The pending partial line is
kept between feeds and a statement is only produced once its line break has
arrived.

Grammar (one statement per line):

    <subject-iri> <predicate-iri> (<object-iri> | "literal") .

Anything else is a fatal ParseError whose message starts with "Unexpected".
"""

import codecs
import logging
import re
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional

from ..errors import ParseError

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r'[ \t]*')
_IRI_TOKEN = re.compile(r'<[^<>"{}|^`\\\s]*>')
_LITERAL_TOKEN = re.compile(
    r'"(?:[^"\\\r\n]|\\(?:[tbnrf"\'\\]|u[0-9A-Fa-f]{4}|U[0-9A-Fa-f]{8}))*"'
    r'(?:@[A-Za-z]+(?:-[A-Za-z0-9]+)*|\^\^<[^<>"{}|^`\\\s]*>)?'
)
_TRAILER = re.compile(r'[ \t]*(?:#.*)?$')


@dataclass(frozen=True)
class RawStatement:
    """One well-formed statement whose tokens still await term classification."""
    subject: str
    predicate: str
    object: str
    line_number: int
    
    @property
    def object_is_iri(self) -> bool:
        return self.object.startswith('<')


class StatementTokenizer:
    """
    Incremental N-Triples line tokenizer.
    
    Usage:
        tokenizer = StatementTokenizer()
        for chunk in chunks:
            for statement in tokenizer.feed(chunk):
                ...
        tokenizer.finish()
    """
    
    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder('utf-8')()
        self._pending = ''
        self._line_number = 0
        self._finished = False
    
    @property
    def line_number(self) -> int:
        """Number of complete lines consumed so far."""
        return self._line_number
    
    def feed(self, chunk: bytes) -> List[RawStatement]:
        """
        Consume one chunk and return every statement it completes.
        
        Raises:
            ParseError: If a completed line does not match the grammar.
        """
        if self._finished:
            raise ParseError("Unexpected data after end of input")
        
        try:
            text = self._decoder.decode(chunk)
        except UnicodeDecodeError as e:
            raise ParseError(f"Unexpected byte sequence: {e}", self._line_number + 1)
        
        if not text:
            return []
        
        buffer = self._pending + text
        lines = buffer.split('\n')
        self._pending = lines.pop()
        
        statements = []
        for line in lines:
            self._line_number += 1
            statement = self._parse_line(line.rstrip('\r'), self._line_number)
            if statement is not None:
                statements.append(statement)
        return statements
    
    def finish(self) -> None:
        """
        Signal end of input.
        
        Raises:
            ParseError: If input ended inside a statement or a character.
        """
        self._finished = True
        try:
            tail = self._decoder.decode(b'', final=True)
        except UnicodeDecodeError as e:
            raise ParseError(f"Unexpected end of input inside a character: {e}",
                             self._line_number + 1)
        
        remainder = self._pending + tail
        self._pending = ''
        logger.debug(f"Tokenizer reached end of input after {self._line_number} lines")
        if remainder.strip() and not remainder.lstrip().startswith('#'):
            preview = remainder.strip()[:80]
            raise ParseError(
                f"Unexpected end of input before statement terminator: {preview!r}",
                self._line_number + 1,
            )
    
    @staticmethod
    def _parse_line(line: str, line_number: int) -> Optional[RawStatement]:
        """Split one complete line into its three tokens, or skip it."""
        stripped = line.strip()
        if not stripped or stripped.startswith('#'):
            return None
        
        pos = _WHITESPACE.match(line).end()
        tokens = []
        for position in ('subject', 'predicate', 'object'):
            match = _IRI_TOKEN.match(line, pos)
            if match is None and position == 'object':
                match = _LITERAL_TOKEN.match(line, pos)
            if match is None:
                found = line[pos:pos + 20] or 'end of line'
                expected = 'IRI or literal' if position == 'object' else 'IRI'
                raise ParseError(
                    f"Unexpected {found!r} at column {pos + 1}: expected {position} {expected}",
                    line_number,
                )
            tokens.append(match.group(0))
            pos = _WHITESPACE.match(line, match.end()).end()
        
        if line[pos:pos + 1] != '.':
            found = line[pos:pos + 20] or 'end of line'
            raise ParseError(
                f"Unexpected {found!r} at column {pos + 1}: expected '.'",
                line_number,
            )
        pos += 1
        if not _TRAILER.match(line, pos):
            raise ParseError(
                f"Unexpected {line[pos:pos + 20]!r} at column {pos + 1} after '.'",
                line_number,
            )
        
        subject, predicate, obj = tokens
        return RawStatement(subject, predicate, obj, line_number)


def tokenize(chunks: Iterable[bytes]) -> Iterator[RawStatement]:
    """Lazily tokenize a chunk sequence into raw statements."""
    tokenizer = StatementTokenizer()
    for chunk in chunks:
        yield from tokenizer.feed(chunk)
    tokenizer.finish()
