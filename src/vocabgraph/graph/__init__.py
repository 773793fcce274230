"""
Graph package - resolution of validated triples into a typed vocabulary graph.

Components:
- model: Class, PropertyType, Property, EnumValue and ResolvedGraph
- resolver: GraphResolver, the stateful triple-to-graph engine
- flatten: multiple-inheritance flattening with cycle detection
- names: identifier-safe display names
"""

from .model import (
    Class,
    EnumValue,
    FieldType,
    IdProperty,
    Property,
    PropertyType,
    ResolvedGraph,
    TypeProperty,
)
from .resolver import GraphResolver, ResolutionContext, resolve_triples
from .flatten import ancestors, check_acyclic, effective_properties, find_cycle
from .names import to_class_name, to_enum_name, to_property_name

__all__ = [
    'Class',
    'EnumValue',
    'FieldType',
    'IdProperty',
    'Property',
    'PropertyType',
    'ResolvedGraph',
    'TypeProperty',
    'GraphResolver',
    'ResolutionContext',
    'resolve_triples',
    'ancestors',
    'check_acyclic',
    'effective_properties',
    'find_cycle',
    'to_class_name',
    'to_enum_name',
    'to_property_name',
]
