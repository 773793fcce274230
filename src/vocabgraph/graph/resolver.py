"""
Graph resolver: validated Triples in, Class / Property / Enum graph out.

Triples are accumulated one at a time into per-subject topics, preserving
arrival order. resolve() then processes the topics in phases:

1. Declare every subject typed rdfs:Class or schema:DataType as a Class.
2. Build classes: comments, subClassOf parents, supersededBy.
3. Build PropertyTypes: comments, rangeIncludes, domainIncludes, supersededBy.
4. Register EnumValues for every declared type that is not Class, DataType
   or Property.
5. Reject inheritance cycles.

Declaring classes first means a forward reference to a class defined later in
the stream resolves; a class that is never declared is fatal.

All mutation happens on a ResolutionContext owned by one resolve() call, so
independent resolutions never share state.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple

from ..errors import MissingClassError, SchemaError
from ..triples.terms import IriTerm, ObjectTerm, Triple, format_triple
from ..triples.well_known import (
    PredicateKind,
    classify_predicate,
    get_comment,
    is_class_type,
    is_data_type,
    is_property_type,
    is_well_known,
)
from .flatten import check_acyclic
from .model import Class, EnumValue, PropertyType, ResolvedGraph

logger = logging.getLogger(__name__)


@dataclass
class _Topic:
    """Everything said about one subject, in arrival order."""
    subject: IriTerm
    values: List[Tuple[PredicateKind, IriTerm, ObjectTerm]] = field(default_factory=list)

    def types(self) -> List[ObjectTerm]:
        return [obj for kind, _, obj in self.values if kind is PredicateKind.TYPE]

    def is_class(self) -> bool:
        return any(is_class_type(t) or is_data_type(t) for t in self.types())

    def is_property(self) -> bool:
        if any(is_property_type(t) for t in self.types()):
            return True
        return any(
            kind in (PredicateKind.DOMAIN_INCLUDES, PredicateKind.RANGE_INCLUDES)
            for kind, _, _ in self.values
        )

    def triple(self, index: int) -> Triple:
        _, predicate, obj = self.values[index]
        return Triple(self.subject, predicate, obj)


@dataclass
class ResolutionContext:
    """Mutable registries for a single resolution."""
    classes: Dict[str, Class] = field(default_factory=dict)
    property_types: Dict[str, PropertyType] = field(default_factory=dict)
    enum_values: Dict[str, EnumValue] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)
    handled: Dict[str, Set[int]] = field(default_factory=dict)

    def mark(self, topic: _Topic, index: int) -> None:
        self.handled.setdefault(topic.subject.href, set()).add(index)

    def warn(self, message: str) -> None:
        self.warnings.append(message)
        logger.warning(message)

    def set_comment(self, entity, kind: str, text: str, warn: bool = True) -> None:
        if entity.set_comment(text) and warn:
            self.warn(
                f"Duplicate comments provided on {kind} {entity.subject}. "
                f"It will be overwritten."
            )

    def find_class(self, term: IriTerm) -> Optional[Class]:
        return self.classes.get(term.href)


class GraphResolver:
    """
    Accumulates triples and resolves them into a ResolvedGraph.

    Example:
        resolver = GraphResolver()
        resolver.add_all(load("https://schema.org/version/latest/schemaorg-current-https.nt"))
        graph = resolver.resolve()
        person = graph.get_class("https://schema.org/Person")

    Not safe for concurrent writers; use one resolver per vocabulary.
    """

    def __init__(self) -> None:
        self._topics: Dict[str, _Topic] = {}
        self.triple_count = 0

    def add(self, triple: Triple) -> None:
        """Record one triple under its subject."""
        topic = self._topics.get(triple.subject.href)
        if topic is None:
            topic = _Topic(triple.subject)
            self._topics[triple.subject.href] = topic
        topic.values.append((classify_predicate(triple.predicate), triple.predicate, triple.object))
        self.triple_count += 1

    def add_all(
        self,
        triples: Iterable[Triple],
        progress_callback: Optional[Callable[[int], None]] = None,
    ) -> int:
        """
        Consume a triple sequence in order.

        Args:
            triples: Triples to record; fatal errors raised while producing
                them propagate unchanged.
            progress_callback: Called with the running count after each triple.

        Returns:
            Number of triples consumed by this call.
        """
        count = 0
        for triple in triples:
            self.add(triple)
            count += 1
            if progress_callback:
                progress_callback(count)
        return count

    def resolve(self) -> ResolvedGraph:
        """
        Build the graph from everything added so far.

        Raises:
            MissingClassError: domainIncludes, subClassOf or an enum type
                names a class that was never declared.
            SchemaError: A Literal where an IRI is required.
            InheritanceCycleError: subClassOf loops.
        """
        topics = list(self._topics.values())
        ctx = ResolutionContext()

        logger.info(f"Resolving {self.triple_count} triples about {len(topics)} subjects")
        self._declare_classes(topics, ctx)
        self._build_classes(topics, ctx)
        self._build_properties(topics, ctx)
        self._build_enums(topics, ctx)
        check_acyclic(ctx.classes.values())

        unhandled = self._report_unhandled(topics, ctx)
        graph = ResolvedGraph(
            classes=ctx.classes,
            property_types=ctx.property_types,
            enum_values=ctx.enum_values,
            warnings=ctx.warnings,
            triple_count=self.triple_count,
            unhandled_count=unhandled,
        )
        stats = graph.statistics()
        logger.info(
            f"Resolved {stats['classes']} classes, {stats['property_types']} properties, "
            f"{stats['enum_values']} enum values"
        )
        return graph

    @staticmethod
    def _declare_classes(topics: List[_Topic], ctx: ResolutionContext) -> None:
        for topic in topics:
            if topic.is_class():
                data_type = any(is_data_type(t) for t in topic.types())
                ctx.classes[topic.subject.href] = Class(topic.subject, is_data_type=data_type)
        logger.debug(f"Declared {len(ctx.classes)} classes")

    @staticmethod
    def _build_classes(topics: List[_Topic], ctx: ResolutionContext) -> None:
        for topic in topics:
            cls = ctx.find_class(topic.subject)
            if cls is None:
                continue

            for index, (kind, predicate, obj) in enumerate(topic.values):
                if kind is PredicateKind.TYPE:
                    if is_class_type(obj) or is_data_type(obj):
                        ctx.mark(topic, index)
                elif kind is PredicateKind.COMMENT:
                    text = get_comment(predicate, obj)
                    if text is not None:
                        ctx.set_comment(cls, "class", text)
                        ctx.mark(topic, index)
                elif kind is PredicateKind.SUBCLASS_OF:
                    _add_parent(cls, topic, index, ctx)
                elif kind is PredicateKind.SUPERSEDED_BY:
                    cls.add_superseded_by(obj)
                    ctx.mark(topic, index)

    @staticmethod
    def _build_properties(topics: List[_Topic], ctx: ResolutionContext) -> None:
        for topic in topics:
            if not topic.is_property():
                continue
            prop = ctx.property_types.get(topic.subject.href)
            if prop is None:
                prop = PropertyType(topic.subject)
                ctx.property_types[topic.subject.href] = prop

            for index, (kind, predicate, obj) in enumerate(topic.values):
                if kind is PredicateKind.TYPE:
                    if is_property_type(obj):
                        ctx.mark(topic, index)
                elif kind is PredicateKind.COMMENT:
                    text = get_comment(predicate, obj)
                    if text is not None:
                        ctx.set_comment(prop, "property", text)
                        ctx.mark(topic, index)
                elif kind is PredicateKind.RANGE_INCLUDES:
                    if not isinstance(obj, IriTerm):
                        raise SchemaError(
                            f"Type expected to be an IRI always. When adding "
                            f"{format_triple(topic.triple(index))} to {topic.subject}."
                        )
                    prop.add_range(obj)
                    ctx.mark(topic, index)
                elif kind is PredicateKind.DOMAIN_INCLUDES:
                    cls = ctx.find_class(obj) if isinstance(obj, IriTerm) else None
                    if cls is None:
                        raise MissingClassError(
                            f"Could not find class for {topic.subject.name}, "
                            f"{format_triple(topic.triple(index))}.",
                            str(obj),
                        )
                    cls.add_property(prop)
                    ctx.mark(topic, index)
                elif kind is PredicateKind.SUPERSEDED_BY:
                    prop.add_superseded_by(obj)
                    ctx.mark(topic, index)

    @staticmethod
    def _build_enums(topics: List[_Topic], ctx: ResolutionContext) -> None:
        for topic in topics:
            if topic.is_property():
                continue

            value: Optional[EnumValue] = None
            for index, (kind, _, obj) in enumerate(topic.values):
                if kind is not PredicateKind.TYPE:
                    continue
                # A subject may be a Class in its own right and still be an
                # enum member of some other declared type.
                if is_class_type(obj) or is_data_type(obj):
                    continue
                if not isinstance(obj, IriTerm):
                    raise SchemaError(
                        f"Type expected to be an IRI always. When adding "
                        f"{format_triple(topic.triple(index))} to {topic.subject}."
                    )
                enclosing = ctx.find_class(obj)
                if enclosing is None:
                    raise MissingClassError(f"Couldn't find {obj} in classes.", str(obj))

                if value is None:
                    value = ctx.enum_values.get(topic.subject.href)
                    if value is None:
                        value = EnumValue(topic.subject)
                        ctx.enum_values[topic.subject.href] = value
                value.register(enclosing)
                ctx.mark(topic, index)

            if value is None:
                continue
            # Duplicates on a subject that is also a Class were already reported.
            warn = ctx.find_class(topic.subject) is None
            for index, (kind, predicate, obj) in enumerate(topic.values):
                if kind is PredicateKind.COMMENT:
                    text = get_comment(predicate, obj)
                    if text is not None:
                        ctx.set_comment(value, "enum", text, warn=warn)
                        ctx.mark(topic, index)

    @staticmethod
    def _report_unhandled(topics: List[_Topic], ctx: ResolutionContext) -> int:
        unhandled = 0
        for topic in topics:
            handled = ctx.handled.get(topic.subject.href, set())
            for index in range(len(topic.values)):
                if index not in handled:
                    unhandled += 1
                    logger.debug(f"Unhandled statement: {format_triple(topic.triple(index))}")
        if unhandled:
            logger.info(f"{unhandled} statements matched no resolution rule")
        return unhandled


def _add_parent(cls: Class, topic: _Topic, index: int, ctx: ResolutionContext) -> None:
    _, _, obj = topic.values[index]
    if not isinstance(obj, IriTerm):
        raise SchemaError(
            f"Parent expected to be an IRI always. When adding "
            f"{format_triple(topic.triple(index))} to {topic.subject}."
        )
    parent = ctx.find_class(obj)
    if parent is None:
        if is_well_known(obj):
            # e.g. schema:DataType rdfs:subClassOf rdfs:Class
            logger.debug(f"Ignoring meta-class parent {obj} of {cls.subject}")
            ctx.mark(topic, index)
            return
        raise MissingClassError(
            f"Couldn't find parent class {obj} of {cls.subject} in classes.",
            str(obj),
        )
    cls.add_parent(parent)
    ctx.mark(topic, index)


def resolve_triples(triples: Iterable[Triple]) -> ResolvedGraph:
    """Convenience wrapper: consume ``triples`` and resolve them."""
    resolver = GraphResolver()
    resolver.add_all(triples)
    return resolver.resolve()
