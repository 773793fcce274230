"""
Inheritance flattening over the class DAG.

Classes may have several direct parents, so the subClassOf relation is a DAG
rather than a tree. Traversal is iterative and every class is visited once; a
cycle is a data error and raises InheritanceCycleError instead of looping.
"""

import logging
from collections import deque
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional

from ..errors import InheritanceCycleError

if TYPE_CHECKING:
    from .model import Class, Property

logger = logging.getLogger(__name__)

_WHITE, _GRAY, _BLACK = 0, 1, 2


def find_cycle(classes: Iterable['Class']) -> Optional[List['Class']]:
    """
    Return one inheritance cycle as a closed path, or None if acyclic.
    
    Uses an explicit-stack depth-first search with three-colour marking.
    """
    colour: Dict[str, int] = {}
    for root in classes:
        if colour.get(root.subject.href, _WHITE) != _WHITE:
            continue
        path: List['Class'] = [root]
        stack = [iter(root.parents)]
        colour[root.subject.href] = _GRAY
        while stack:
            parent = next(stack[-1], None)
            if parent is None:
                stack.pop()
                colour[path.pop().subject.href] = _BLACK
                continue
            state = colour.get(parent.subject.href, _WHITE)
            if state == _GRAY:
                start = next(i for i, c in enumerate(path) if c is parent)
                return path[start:] + [parent]
            if state == _WHITE:
                colour[parent.subject.href] = _GRAY
                path.append(parent)
                stack.append(iter(parent.parents))
    return None


def check_acyclic(classes: Iterable['Class']) -> None:
    """Raise InheritanceCycleError if any class is its own ancestor."""
    cycle = find_cycle(classes)
    if cycle is not None:
        logger.error(f"Circular inheritance: {' -> '.join(c.name for c in cycle)}")
        raise InheritanceCycleError([c.subject for c in cycle])


def ancestors(cls: 'Class') -> List['Class']:
    """
    Every transitive parent of ``cls``, nearest first, each exactly once.
    
    Raises:
        InheritanceCycleError: If ``cls`` is reachable from its own parents.
    """
    result: List['Class'] = []
    seen = {cls.subject.href}
    queue = deque(cls.parents)
    while queue:
        parent = queue.popleft()
        if parent is cls:
            raise InheritanceCycleError([cls.subject, parent.subject])
        if parent.subject.href in seen:
            continue
        seen.add(parent.subject.href)
        result.append(parent)
        queue.extend(parent.parents)
    return result


def effective_properties(cls: 'Class', include_deprecated: bool = True) -> List['Property']:
    """
    Own and inherited properties, deduplicated by property IRI.
    
    A property reachable through two ancestor paths counts once; the binding
    closest to ``cls`` wins. The result is sorted by property name.
    """
    merged: Dict[str, 'Property'] = {}
    for owner in [cls, *ancestors(cls)]:
        for prop in owner.properties:
            merged.setdefault(prop.key.href, prop)
    
    props = [p for p in merged.values() if include_deprecated or not p.deprecated]
    return sorted(props, key=lambda p: (p.name, p.key.href))
