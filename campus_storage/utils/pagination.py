# ================================
# PAGINATION (utils/pagination.py)
# ================================

from typing import List, Sequence, Tuple, TypeVar

from campus_storage.core.exceptions import ValidationError

T = TypeVar("T")


def page(items: Sequence[T], page_number: int, page_size: int) -> Tuple[List[T], int]:
    """Slice one 1-indexed page; total is the count before slicing"""
    if page_number < 1:
        raise ValidationError("Page number must be at least 1")
    if page_size < 1:
        raise ValidationError("Page size must be at least 1")

    total = len(items)
    offset = (page_number - 1) * page_size
    return list(items[offset:offset + page_size]), total


def page_count(total: int, page_size: int) -> int:
    return (total + page_size - 1) // page_size
