from typing import Callable, Optional, Sequence, TypeVar


T = TypeVar("T")


def reduce_ordered(
    items: Sequence[T],
    combine: Callable[[T, T], T],
    fork: Optional[Callable] = None,
) -> T:
    # Operands always reach `combine` in sequence order. Only nodes of three or
    # more items fork, so at most len(items) - 2 forks are ever outstanding.
    items = list(items)
    if not items:
        raise ValueError("nothing to reduce")
    return _reduce(items, combine, fork)


def _reduce(items, combine, fork):
    if len(items) == 1:
        return items[0]
    if len(items) == 2:
        return combine(items[0], items[1])
    mid = len(items) // 2
    if fork is None:
        left = _reduce(items[:mid], combine, None)
        right = _reduce(items[mid:], combine, None)
    else:
        pending = fork(_reduce, items[:mid], combine, fork)
        right = _reduce(items[mid:], combine, fork)
        left = pending.result()
    return combine(left, right)
