"""
Resolved vocabulary graph model.

These classes are the output of the GraphResolver and the input of any
emission layer. They are built incrementally, one triple at a time, and are
never deleted once created.

Components:
- PropertyType: the shared definition of a named field
- Property: one class's binding to a PropertyType
- TypeProperty / IdProperty: synthetic "@type" and "@id" fields
- FieldType: the value type of a field (range union, fixed cardinality)
- Class: a type definition with parents, own properties and enum members
- EnumValue: a named constant belonging to one or more classes
- ResolvedGraph: the enumerable result handed to emission
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union

from ..triples.terms import IriTerm, ObjectTerm
from . import flatten
from .names import to_class_name, to_enum_name, to_property_name


def _deprecation_notice(superseded_by: Sequence[ObjectTerm]) -> str:
    replacements = ' or '.join(str(o) for o in superseded_by)
    return f"@deprecated Consider using {replacements} instead."


def _effective_comment(comment: Optional[str], superseded_by: Sequence[ObjectTerm]) -> Optional[str]:
    if not superseded_by:
        return comment
    notice = _deprecation_notice(superseded_by)
    return f"{comment}\n{notice}" if comment else notice


class _Commented:
    """Comment and deprecation state shared by Classes and PropertyTypes."""

    subject: IriTerm

    def __init__(self) -> None:
        self._comment: Optional[str] = None
        self._superseded_by: List[ObjectTerm] = []

    def set_comment(self, text: str) -> bool:
        """Set the comment, returning True if an existing one was overwritten."""
        overwritten = self._comment is not None
        self._comment = text
        return overwritten

    def add_superseded_by(self, replacement: ObjectTerm) -> None:
        if replacement not in self._superseded_by:
            self._superseded_by.append(replacement)

    @property
    def comment(self) -> Optional[str]:
        """The comment with a deprecation notice appended when deprecated."""
        return _effective_comment(self._comment, self._superseded_by)

    @property
    def superseded_by(self) -> Tuple[ObjectTerm, ...]:
        return tuple(self._superseded_by)

    @property
    def deprecated(self) -> bool:
        return bool(self._superseded_by)


@dataclass(frozen=True)
class FieldType:
    """
    Value type of a field.

    Every field is optional and accepts either one value or an ordered
    collection of values; that cardinality is fixed. An empty member list is
    the uninhabited "never" type.
    """
    members: Tuple[IriTerm, ...]
    optional: bool = field(default=True, init=False)
    allows_many: bool = field(default=True, init=False)

    @property
    def is_never(self) -> bool:
        return not self.members

    @property
    def member_names(self) -> List[str]:
        return [to_class_name(m) for m in self.members]


class PropertyType(_Commented):
    """A "class" of properties, not associated with any particular object."""

    def __init__(self, subject: IriTerm):
        super().__init__()
        self.subject = subject
        self._ranges: Dict[str, IriTerm] = {}
        self._classes: Dict[str, 'Class'] = {}

    @property
    def name(self) -> str:
        return to_property_name(self.subject)

    def add_range(self, range_term: IriTerm) -> None:
        self._ranges.setdefault(range_term.href, range_term)

    def attach(self, cls: 'Class') -> None:
        self._classes.setdefault(cls.subject.href, cls)

    @property
    def ranges(self) -> List[IriTerm]:
        """Permitted range IRIs, sorted by display name."""
        return sorted(self._ranges.values(), key=lambda t: (to_class_name(t), t.href))

    @property
    def classes(self) -> List['Class']:
        """Every class this property is attached to."""
        return sorted(self._classes.values(), key=lambda c: (c.name, c.subject.href))

    def value_type(self) -> FieldType:
        return FieldType(tuple(self.ranges))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "iri": self.subject.href,
            "name": self.name,
            "comment": self.comment,
            "deprecated": self.deprecated,
            "types": self.value_type().member_names,
            "classes": [c.name for c in self.classes],
        }

    def __repr__(self) -> str:
        return f"PropertyType({self.subject.href!r})"


class Property:
    """A Property on a particular class."""

    def __init__(self, owner: 'Class', property_type: PropertyType):
        self.owner = owner
        self.type = property_type

    @property
    def key(self) -> IriTerm:
        return self.type.subject

    @property
    def name(self) -> str:
        return self.type.name

    @property
    def comment(self) -> Optional[str]:
        return self.type.comment

    @property
    def deprecated(self) -> bool:
        return self.type.deprecated

    def value_type(self) -> FieldType:
        return self.type.value_type()

    def to_dict(self) -> Dict[str, Any]:
        value_type = self.value_type()
        return {
            "name": self.name,
            "iri": self.key.href,
            "types": value_type.member_names,
            "optional": value_type.optional,
            "allowsMany": value_type.allows_many,
            "deprecated": self.deprecated,
            "comment": self.comment,
        }

    def __repr__(self) -> str:
        return f"Property({self.owner.name}.{self.name})"


class TypeProperty:
    """Discriminant field whose value is fixed to the class's own name."""

    name = "@type"
    optional = False
    deprecated = False
    comment = None

    def __init__(self, owner: 'Class'):
        self.owner = owner

    @property
    def value(self) -> str:
        return self.owner.name

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value, "optional": self.optional}


class IdProperty:
    """Optional string field holding the object's canonical IRI."""

    name = "@id"
    optional = True
    deprecated = False
    comment = "IRI identifying the canonical address of this object."

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "types": ["string"], "optional": self.optional,
                "comment": self.comment}


Field = Union[TypeProperty, IdProperty, Property]


class EnumValue:
    """Corresponds to a value that belongs to an Enumeration."""

    def __init__(self, subject: IriTerm):
        self.subject = subject
        self._comment: Optional[str] = None
        self._classes: Dict[str, 'Class'] = {}

    @property
    def name(self) -> str:
        return to_enum_name(self.subject)

    @property
    def comment(self) -> Optional[str]:
        return self._comment

    def set_comment(self, text: str) -> bool:
        overwritten = self._comment is not None
        self._comment = text
        return overwritten

    def register(self, cls: 'Class') -> None:
        self._classes.setdefault(cls.subject.href, cls)
        cls.add_enum(self)

    @property
    def classes(self) -> List['Class']:
        """Every enclosing class of this value."""
        return list(self._classes.values())

    def to_dict(self) -> Dict[str, Any]:
        return {"iri": self.subject.href, "name": self.name, "comment": self.comment}

    def __repr__(self) -> str:
        return f"EnumValue({self.subject.href!r})"


class Class(_Commented):
    """
    A type definition node.

    Attributes:
        subject: IRI of the class.
        is_data_type: True when declared as a DataType (a raw-value type).
    """

    def __init__(self, subject: IriTerm, is_data_type: bool = False):
        super().__init__()
        self.subject = subject
        self.is_data_type = is_data_type
        self._parents: Dict[str, 'Class'] = {}
        self._properties: Dict[str, Property] = {}
        self._enum_values: Dict[str, EnumValue] = {}

    @property
    def name(self) -> str:
        return to_class_name(self.subject)

    def add_parent(self, parent: 'Class') -> None:
        self._parents.setdefault(parent.subject.href, parent)

    def add_property(self, property_type: PropertyType) -> Property:
        """Bind a PropertyType to this class; re-binding returns the existing Property."""
        prop = self._properties.get(property_type.subject.href)
        if prop is None:
            prop = Property(self, property_type)
            self._properties[property_type.subject.href] = prop
            property_type.attach(self)
        return prop

    def add_enum(self, value: EnumValue) -> None:
        self._enum_values.setdefault(value.subject.href, value)

    @property
    def parents(self) -> List['Class']:
        """Direct parents in declaration order."""
        return list(self._parents.values())

    @property
    def properties(self) -> List[Property]:
        """Own properties, sorted by name."""
        return sorted(self._properties.values(), key=lambda p: (p.name, p.key.href))

    @property
    def enum_values(self) -> List[EnumValue]:
        return sorted(self._enum_values.values(), key=lambda e: (e.name, e.subject.href))

    @property
    def is_enumeration(self) -> bool:
        return bool(self._enum_values)

    def ancestors(self) -> List['Class']:
        return flatten.ancestors(self)

    def all_properties(self, include_deprecated: bool = True) -> List[Property]:
        """Own and inherited properties, each property IRI once."""
        return flatten.effective_properties(self, include_deprecated)

    def fields(self, include_deprecated: bool = True) -> List[Field]:
        """The @type and @id fields followed by every effective property."""
        return [TypeProperty(self), IdProperty(), *self.all_properties(include_deprecated)]

    def to_dict(self, include_deprecated: bool = True) -> Dict[str, Any]:
        return {
            "iri": self.subject.href,
            "name": self.name,
            "comment": self.comment,
            "deprecated": self.deprecated,
            "dataType": self.is_data_type,
            "parents": [p.name for p in self.parents],
            "fields": [f.to_dict() for f in self.fields(include_deprecated)],
            "enumValues": [e.to_dict() for e in self.enum_values],
        }

    def __repr__(self) -> str:
        return f"Class({self.subject.href!r})"


@dataclass
class ResolvedGraph:
    """
    The resolved Class / PropertyType / EnumValue graph.

    Attributes:
        classes: Classes keyed by IRI string.
        property_types: PropertyTypes keyed by IRI string.
        enum_values: EnumValues keyed by IRI string.
        warnings: Non-fatal issues observed while resolving.
        triple_count: Number of triples consumed.
        unhandled_count: Number of statements no rule applied to.
    """
    classes: Dict[str, Class] = field(default_factory=dict)
    property_types: Dict[str, PropertyType] = field(default_factory=dict)
    enum_values: Dict[str, EnumValue] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)
    triple_count: int = 0
    unhandled_count: int = 0

    def get_class(self, iri: Union[str, IriTerm]) -> Optional[Class]:
        return self.classes.get(str(iri))

    def get_property_type(self, iri: Union[str, IriTerm]) -> Optional[PropertyType]:
        return self.property_types.get(str(iri))

    def iter_classes(self, include_deprecated: bool = True) -> Iterator[Class]:
        """Classes sorted by display name."""
        for cls in sorted(self.classes.values(), key=lambda c: (c.name, c.subject.href)):
            if include_deprecated or not cls.deprecated:
                yield cls

    def iter_property_types(self, include_deprecated: bool = True) -> Iterator[PropertyType]:
        for prop in sorted(self.property_types.values(), key=lambda p: (p.name, p.subject.href)):
            if include_deprecated or not prop.deprecated:
                yield prop

    def statistics(self) -> Dict[str, int]:
        return {
            "triples": self.triple_count,
            "classes": len(self.classes),
            "data_types": sum(1 for c in self.classes.values() if c.is_data_type),
            "property_types": len(self.property_types),
            "enum_values": len(self.enum_values),
            "deprecated_classes": sum(1 for c in self.classes.values() if c.deprecated),
            "deprecated_properties": sum(1 for p in self.property_types.values() if p.deprecated),
            "unhandled": self.unhandled_count,
            "warnings": len(self.warnings),
        }

    def to_dict(self, include_deprecated: bool = True) -> Dict[str, Any]:
        return {
            "classes": [c.to_dict(include_deprecated) for c in self.iter_classes(include_deprecated)],
            "properties": [p.to_dict() for p in self.iter_property_types(include_deprecated)],
            "statistics": self.statistics(),
            "warnings": list(self.warnings),
        }
