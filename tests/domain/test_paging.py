"""Tests for order listing page normalization."""

import pytest
from pantry.order.queries import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, normalize_paging


@pytest.mark.parametrize(
    "page,page_size,expected",
    [
        (1, 20, (1, 20)),
        (3, 5, (3, 5)),
        (0, 20, (1, 20)),
        (-2, 20, (1, 20)),
        (1, 0, (1, DEFAULT_PAGE_SIZE)),
        (1, MAX_PAGE_SIZE, (1, MAX_PAGE_SIZE)),
        (1, MAX_PAGE_SIZE + 1, (1, DEFAULT_PAGE_SIZE)),
        (None, None, (1, DEFAULT_PAGE_SIZE)),
    ],
)
def test_normalize_paging(page, page_size, expected):
    assert normalize_paging(page, page_size) == expected
