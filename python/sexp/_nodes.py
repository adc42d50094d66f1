"""Tree nodes produced by the parser.

Three node types make up a tree:

* :class:`Symbol` -- an atom, the only leaf.
* :class:`List` -- a variable-arity sequence of children (flexible mode).
* :class:`Pair` -- a binary cons cell; chains of pairs are the canonical form.

Nodes are immutable once the parser hands them out.
"""

from __future__ import annotations

import abc
from collections.abc import Iterable, Iterator


class Node(abc.ABC):
    """Common interface of every tree node."""

    __slots__ = ()

    @property
    @abc.abstractmethod
    def is_leaf(self) -> bool:
        """``True`` only for :class:`Symbol`."""

    @property
    def is_atom(self) -> bool:
        """Same as :attr:`is_leaf`."""
        return self.is_leaf

    @property
    @abc.abstractmethod
    def leaf_count(self) -> int:
        """Number of :class:`Symbol` leaves reachable from this node."""

    @property
    @abc.abstractmethod
    def head(self) -> Node:
        """First element (car)."""

    @property
    @abc.abstractmethod
    def tail(self) -> Node | None:
        """Everything after the first element (cdr)."""

    @abc.abstractmethod
    def render(self) -> str:
        """Return the canonical text form of this node."""

    @abc.abstractmethod
    def clone(self) -> Node:
        """Return an independent, structurally equal copy of this node.

        Subclasses may override this to provide their own copy; containers
        clone their children through this method, so an override is always
        used ahead of the structural copy.
        """

    def __bool__(self) -> bool:
        return True

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return self.render()


class Symbol(Node):
    """Atomic leaf holding the verbatim text of one token."""

    __slots__ = ("_value",)

    def __init__(self, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"symbol value must be str, not {type(value).__name__}")
        self._value = value

    @property
    def value(self) -> str:
        return self._value

    @property
    def is_leaf(self) -> bool:
        return True

    @property
    def leaf_count(self) -> int:
        return 1

    @property
    def head(self) -> Symbol:
        return self

    @property
    def tail(self) -> None:
        return None

    def render(self) -> str:
        return self._value

    def clone(self) -> Symbol:
        return Symbol(self._value)

    def __len__(self) -> int:
        return 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Symbol):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash((Symbol, self._value))


class List(Node):
    """Ordered, variable-arity sequence of child nodes.

    Children can be reached by position (``lst[0]``, ``lst[-1]``) or by the
    text of their head symbol (``lst["pos"]`` finds the first child that
    looks like ``(pos ...)``).
    """

    __slots__ = ("_children",)

    def __init__(self, children: Iterable[Node] = ()) -> None:
        self._children: tuple[Node, ...] = tuple(children)

    @property
    def children(self) -> tuple[Node, ...]:
        return self._children

    @property
    def is_leaf(self) -> bool:
        return False

    @property
    def leaf_count(self) -> int:
        return _count_leaves(self)

    @property
    def head(self) -> Node:
        """First child.

        Raises:
            IndexError: If the list is empty.

        """
        if not self._children:
            raise IndexError("head of empty list")
        return self._children[0]

    @property
    def tail(self) -> List:
        """A new list holding every child after the first."""
        return List(self._children[1:])

    def render(self) -> str:
        return _render(self)

    def clone(self) -> List:
        return _clone(self)  # type: ignore[return-value]

    def __len__(self) -> int:
        return len(self._children)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._children)

    def __getitem__(self, key: int | str) -> Node:
        """Look a child up by position or by head symbol.

        Raises:
            IndexError: If an integer key is out of range.
            KeyError:   If no child list starts with the symbol ``key``.
            TypeError:  If ``key`` is neither ``int`` nor ``str``.

        """
        if isinstance(key, int):
            return self._children[key]
        if isinstance(key, str):
            for child in self._children:
                if child.is_leaf or (isinstance(child, List) and not child._children):
                    continue
                first = child.head
                if isinstance(first, Symbol) and first.value == key:
                    return child
            raise KeyError(key)
        raise TypeError(f"list indices must be int or str, not {type(key).__name__}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, List):
            return NotImplemented
        return _equal(self, other)

    def __hash__(self) -> int:
        return hash((List, _render(self)))


class Pair(Node):
    """Cons cell of the canonical form.

    ``value`` holds the element, ``next`` either continues the chain with
    another :class:`Pair`, ends it with a plain node, or is ``None``.
    """

    __slots__ = ("_value", "_next")

    def __init__(self, value: Node, next: Node | None = None) -> None:
        self._value = value
        self._next = next

    @classmethod
    def promote(cls, node: Node) -> Pair:
        """Wrap *node* into a one-cell chain; pairs are returned unchanged."""
        if isinstance(node, Pair):
            return node
        return cls(node)

    @property
    def value(self) -> Node:
        return self._value

    @property
    def next(self) -> Node | None:
        return self._next

    @property
    def is_leaf(self) -> bool:
        return False

    @property
    def leaf_count(self) -> int:
        return _count_leaves(self)

    @property
    def head(self) -> Node:
        return self._value

    @property
    def tail(self) -> Node | None:
        return self._next

    def last(self) -> Pair:
        """Return the final cell of the chain."""
        cell = self
        while isinstance(cell._next, Pair):
            cell = cell._next
        return cell

    def _attach(self, node: Node) -> Pair:
        # Only called by the parser while the chain is still being built.
        # Returns the new last cell so the caller can keep attaching there.
        last = self.last()
        if last._next is None:
            last._next = node
        else:
            last._next = last = Pair(last._next, node)
        return last.last()

    def render(self) -> str:
        return _render(self)

    def clone(self) -> Pair:
        return _clone(self)  # type: ignore[return-value]

    def __iter__(self) -> Iterator[Node]:
        cell: Node | None = self
        while isinstance(cell, Pair):
            yield cell._value
            cell = cell._next
        if cell is not None:
            yield cell

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pair):
            return NotImplemented
        return _equal(self, other)

    def __hash__(self) -> int:
        return hash((Pair, _render(self)))


def clone(node: Node) -> Node:
    """Deep-copy *node* into an independent tree."""
    return node.clone()


# Trees can be nested far deeper than the interpreter's recursion limit, so
# every whole-tree walk below keeps its own stack.


def _count_leaves(root: Node) -> int:
    count = 0
    stack = [root]
    while stack:
        node = stack.pop()
        if isinstance(node, List):
            stack.extend(node._children)
        elif isinstance(node, Pair):
            stack.append(node._value)
            if node._next is not None:
                stack.append(node._next)
        else:
            count += node.leaf_count
    return count


def _render(root: Node) -> str:
    parts: list[str] = []
    stack: list[Node | str] = [root]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
        elif isinstance(item, List):
            stack.append(")")
            children = item._children
            for i in range(len(children) - 1, -1, -1):
                stack.append(children[i])
                if i:
                    stack.append(" ")
            stack.append("(")
        elif isinstance(item, Pair):
            stack.append(")")
            if item._next is not None:
                stack.append(item._next)
                stack.append(" ")
            stack.append(item._value)
            stack.append("(")
        else:
            parts.append(item.render())
    return "".join(parts)


def _copies_structurally(node: Node) -> bool:
    # A subclass that overrides clone() is copied by its own method.
    return type(node).clone in (List.clone, Pair.clone)


def _clone(root: Node) -> Node:
    built: list[Node] = []
    stack: list[tuple[Node, bool]] = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if expanded:
            if isinstance(node, List):
                start = len(built) - len(node._children)
                children = built[start:]
                del built[start:]
                built.append(List(children))
            else:
                rest = built.pop() if node._next is not None else None  # type: ignore[attr-defined]
                built.append(Pair(built.pop(), rest))
        elif node is root or _copies_structurally(node):
            stack.append((node, True))
            if isinstance(node, List):
                stack.extend((child, False) for child in reversed(node._children))
            elif isinstance(node, Pair):
                if node._next is not None:
                    stack.append((node._next, False))
                stack.append((node._value, False))
        else:
            built.append(node.clone())
    return built[0]


def _equal(a: Node, b: Node) -> bool:
    stack = [(a, b)]
    while stack:
        x, y = stack.pop()
        if x is y:
            continue
        if isinstance(x, List) and isinstance(y, List):
            if len(x._children) != len(y._children):
                return False
            stack.extend(zip(x._children, y._children))
        elif isinstance(x, Pair) and isinstance(y, Pair):
            if (x._next is None) != (y._next is None):
                return False
            stack.append((x._value, y._value))
            if x._next is not None:
                stack.append((x._next, y._next))  # type: ignore[arg-type]
        elif isinstance(x, (List, Pair)) or isinstance(y, (List, Pair)):
            return False
        elif x != y:
            return False
    return True
