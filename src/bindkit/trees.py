"""Ancestor/descendant search over element trees.

UI toolkits often expose more than one tree over the same elements (a
logical tree of declared children and a visual tree of rendered parts).
The search functions here are written once against the TreeSource
protocol; CombinedTreeSource merges several sources so a search can follow
whichever tree links two elements.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator, Protocol

from bindkit.errors import InvalidArgumentError

Predicate = Callable[[Any], bool]

_DONE = object()


class TreeSource(Protocol):
    def parent_of(self, node: Any) -> Any | None: ...

    def children_of(self, node: Any) -> Iterable[Any]: ...


class AttributeTreeSource:
    """Tree whose links are plain attributes on the nodes."""

    def __init__(self, parent_attr: str = "parent", children_attr: str = "children") -> None:
        self.parent_attr = parent_attr
        self.children_attr = children_attr

    def parent_of(self, node: Any) -> Any | None:
        return getattr(node, self.parent_attr, None)

    def children_of(self, node: Any) -> Iterable[Any]:
        return getattr(node, self.children_attr, None) or ()


class CombinedTreeSource:
    """Several sources searched as one tree.

    parent_of() asks each source in order and returns the first parent
    found. children_of() concatenates the children of every source,
    skipping nodes already yielded.
    """

    def __init__(self, *sources: TreeSource) -> None:
        if not sources:
            raise InvalidArgumentError("CombinedTreeSource needs at least one source")
        self.sources = sources

    def parent_of(self, node: Any) -> Any | None:
        for source in self.sources:
            parent = source.parent_of(node)
            if parent is not None:
                return parent
        return None

    def children_of(self, node: Any) -> Iterable[Any]:
        seen: set[int] = set()
        for source in self.sources:
            for child in source.children_of(node):
                if id(child) not in seen:
                    seen.add(id(child))
                    yield child


def match(type_: type | tuple[type, ...] | None = None, name: str | None = None, name_attr: str = "name") -> Predicate:
    """Predicate matching nodes by type, by name, or both.

    With neither given, every node matches.
    """

    def _predicate(node: Any) -> bool:
        if node is None:
            return False
        if type_ is not None and not isinstance(node, type_):
            return False
        if name and getattr(node, name_attr, None) != name:
            return False
        return True

    return _predicate


def _ancestors(node: Any, source: TreeSource) -> Iterator[Any]:
    seen = {id(node)}
    parent = source.parent_of(node)
    while parent is not None and id(parent) not in seen:
        seen.add(id(parent))
        yield parent
        parent = source.parent_of(parent)


def _descendants(node: Any, source: TreeSource) -> Iterator[Any]:
    # Depth-first, pre-order; iterative so deep trees don't hit the recursion limit.
    seen = {id(node)}
    stack = [iter(source.children_of(node))]
    while stack:
        child = next(stack[-1], _DONE)
        if child is _DONE:
            stack.pop()
            continue
        if id(child) in seen:
            continue
        seen.add(id(child))
        yield child
        stack.append(iter(source.children_of(child)))


def find_ancestor(node: Any, predicate: Predicate, source: TreeSource) -> Any | None:
    """Nearest ancestor of node matching predicate, or None."""
    return next((p for p in _ancestors(node, source) if predicate(p)), None)


def find_ancestors(node: Any, predicate: Predicate, source: TreeSource) -> list[Any]:
    """All matching ancestors, nearest first."""
    return [p for p in _ancestors(node, source) if predicate(p)]


def find_descendant(node: Any, predicate: Predicate, source: TreeSource) -> Any | None:
    """First matching descendant in depth-first order, or None."""
    return next((c for c in _descendants(node, source) if predicate(c)), None)


def find_descendants(node: Any, predicate: Predicate, source: TreeSource) -> list[Any]:
    """All matching descendants in depth-first order."""
    return [c for c in _descendants(node, source) if predicate(c)]
