"""
Ordered list helpers shared by group, attribute and image reordering.
"""

from typing import List, TypeVar

from src.core.errors import InvalidReferenceError

T = TypeVar("T")


def check_index(items: List, index: int, what: str = "item") -> int:
    """Return ``index`` if it addresses an element of ``items``."""
    if not isinstance(index, int) or isinstance(index, bool):
        raise InvalidReferenceError(
            f"{what} index must be an integer",
            details={"index": repr(index)},
        )
    if index < 0 or index >= len(items):
        raise InvalidReferenceError(
            f"{what} index {index} out of range",
            details={"index": index, "length": len(items)},
        )
    return index


def move(items: List[T], from_index: int, to_index: int, what: str = "item") -> List[T]:
    """
    Move one element of ``items`` in place and return the list.

    The element at ``from_index`` is removed first and then inserted at
    ``to_index`` of the shortened list, so every element between the two
    positions shifts by one. Applying ``move(items, to_index, from_index)``
    afterwards restores the original order.

    Args:
        items: List to reorder
        from_index: Current position of the element
        to_index: Target position of the element
        what: Name used in error messages

    Returns:
        The same list object, reordered

    Raises:
        InvalidReferenceError: If either index is out of range
    """
    check_index(items, from_index, what)
    check_index(items, to_index, what)

    if from_index == to_index:
        return items

    element = items.pop(from_index)
    items.insert(to_index, element)
    return items
