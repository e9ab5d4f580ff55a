"""Unordered matching of repeated values and mismatch rendering."""
from typing import Any, Callable, List, Sequence, Tuple, TypeVar

T = TypeVar("T")


def diff_slices(
    a: Sequence[T],
    b: Sequence[T],
    equal: Callable[[T, T], bool]
) -> Tuple[List[T], List[T]]:
    """
    Match the elements of two sequences regardless of their order.

    Each element of ``a`` is paired with the first element of ``b`` that is
    equal to it and not already paired. The matching is greedy: it never
    revisits an earlier pairing, so the result follows input order.

    Args:
        a: Expected elements
        b: Actual elements
        equal: Pairwise equality predicate

    Returns:
        Elements of ``a`` with no match in ``b``, and elements of ``b`` with
        no match in ``a``
    """
    visited = [False] * len(b)
    extra_a: List[T] = []
    for item_a in a:
        for j, item_b in enumerate(b):
            if visited[j]:
                continue
            if equal(item_a, item_b):
                visited[j] = True
                break
        else:
            extra_a.append(item_a)

    extra_b = [item_b for j, item_b in enumerate(b) if not visited[j]]
    return extra_a, extra_b


def compare_diff(extra_expected: Sequence[Any], extra_actual: Sequence[Any]) -> str:
    """Render unmatched elements; empty when everything matched."""
    if not extra_expected and not extra_actual:
        return ""

    lines = []
    if extra_expected:
        lines.append("missing expected values:\n")
        lines.extend(f"{v!r}\n" for v in extra_expected)

    if extra_actual:
        lines.append("unexpected additional values:\n")
        lines.extend(f"{v!r}\n" for v in extra_actual)

    return "".join(lines)


def not_equal_str(prefix: str, expected: Any, actual: Any) -> str:
    """Render a single field mismatch."""
    return f"{prefix} not equal:\nexpected: {expected}\nactual: {actual}"


def equal_slices(a: Sequence[Any], b: Sequence[Any]) -> bool:
    """Ordered element-wise equality of two sequences of any type."""
    if len(a) != len(b):
        return False
    return all(x == y for x, y in zip(a, b))
