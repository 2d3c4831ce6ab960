"""Unit tests for the Paginator page window and clamping."""

import pytest

from wms.application.services import Paginator


def test_rejects_non_positive_page_size():
    with pytest.raises(ValueError):
        Paginator(0)


def test_empty_list_has_one_empty_page():
    window = Paginator(10).window([])
    assert window.page == 1
    assert window.total_pages == 1
    assert window.items == []
    assert not window.can_go_next
    assert not window.can_go_previous


def test_window_reports_indices_and_navigation():
    items = list(range(25))
    window = Paginator(10).window(items, page=2)

    assert window.items == list(range(10, 20))
    assert (window.start_index, window.end_index) == (10, 20)
    assert window.total_pages == 3
    assert window.can_go_next
    assert window.can_go_previous


def test_last_page_is_partial():
    window = Paginator(10).window(list(range(25)), page=3)
    assert window.items == [20, 21, 22, 23, 24]
    assert not window.can_go_next


def test_shrinking_list_pulls_the_page_back_into_range():
    paginator = Paginator(10)
    paginator.window(list(range(25)), page=3)

    # Twelve rows deleted: 13 remain, two pages.
    window = paginator.window(list(range(13)))

    assert window.page == 2
    assert window.total_pages == 2
    assert window.items == [10, 11, 12]


def test_out_of_range_requests_are_clamped():
    paginator = Paginator(10)
    assert paginator.window(list(range(25)), page=99).page == 3
    assert paginator.window(list(range(25)), page=0).page == 1


@pytest.mark.parametrize("total", [0, 1, 9, 10, 11, 30])
def test_current_page_stays_within_bounds(total):
    paginator = Paginator(10)
    paginator.window(list(range(total)), page=5)
    assert 1 <= paginator.current_page <= paginator.total_pages


def test_navigation_helpers_respect_bounds():
    paginator = Paginator(10)
    paginator.window(list(range(25)))

    assert paginator.previous() == 1
    assert paginator.next() == 2
    assert paginator.last() == 3
    assert paginator.next() == 3
    assert paginator.first() == 1

    paginator.go_to(3)
    paginator.reset()
    assert paginator.current_page == 1
