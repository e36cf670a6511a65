import pytest

from restaurant_api.core.errors import ValidationError
from restaurant_api.core.pagination import paginate, total_pages


def test_defaults():
    window = paginate(None, None)

    assert window.page == 1
    assert window.offset == 0
    assert window.safe_limit == 10


def test_second_page_of_25_rows():
    window = paginate(page=2, limit=10)

    assert window.offset == 10
    assert window.total_pages(25) == 3


def test_limit_above_maximum_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        paginate(page=1, limit=1000)

    assert "Limit reached" in exc_info.value.message


def test_limit_at_maximum_is_accepted():
    assert paginate(page=1, limit=50).safe_limit == 50


def test_custom_maximum():
    with pytest.raises(ValidationError):
        paginate(page=1, limit=21, max_limit=20)


def test_values_are_coerced():
    window = paginate(page="3", limit="5")

    assert window.page == 3
    assert window.offset == 10


@pytest.mark.parametrize("page,limit", [(0, 10), (-1, 10), (1, 0), ("abc", 10)])
def test_non_positive_values_are_rejected(page, limit):
    with pytest.raises(ValidationError):
        paginate(page=page, limit=limit)


def test_total_pages():
    assert total_pages(0, 10) == 0
    assert total_pages(10, 10) == 1
    assert total_pages(11, 10) == 2
