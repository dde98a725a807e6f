"""
Leaf traversal for FHIR item trees.

Questionnaires and questionnaire responses nest their items arbitrarily
deep. Traversal uses an explicit stack so adversarially deep trees cannot
exhaust the interpreter's recursion limit.
"""
from typing import Iterable, Iterator, Protocol, Sequence, TypeVar


class TreeNode(Protocol):
    item: Sequence["TreeNode"]


NodeT = TypeVar("NodeT", bound=TreeNode)


def iter_leaves(nodes: Iterable[NodeT]) -> Iterator[NodeT]:
    """Yield leaf nodes depth-first, pre-order, children in original order.

    A node without child items is a leaf. Parents are never yielded.

    Args:
        nodes: Root-level items

    Returns:
        Iterator over leaf items
    """
    stack = list(reversed(list(nodes)))
    while stack:
        node = stack.pop()
        children = node.item or []
        if not children:
            yield node
        else:
            stack.extend(reversed(children))
