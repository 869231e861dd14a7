from typing import TypeVar

T = TypeVar("T")


def quote(value: str) -> str:
    """Quote a string literal for a LanceDB filter expression."""
    return "'" + value.replace("'", "''") + "'"


def paginate(items: list[T], limit: int | None, offset: int | None) -> list[T]:
    start = offset or 0
    if limit is None:
        return items[start:]
    return items[start : start + limit]
