import pytest

from common.enum.error_code import APIError
from common.exception.exceptions import ValidationError
from common.query.pagination import PaginationCalculator, PageWindow


class TestPageWindow:

    def test_defaults(self):
        window = PaginationCalculator().window()
        assert window == PageWindow(page=1, limit=10)
        assert window.skip == 0

    def test_skip_for_later_page(self):
        window = PaginationCalculator().window(3, 10)
        assert window.skip == 20

    def test_numeric_strings_accepted(self):
        window = PaginationCalculator().window('2', '5')
        assert (window.page, window.limit) == (2, 5)

    @pytest.mark.parametrize('page, limit', [
        (0, 10),
        (-1, 10),
        (1, 0),
        (1, 101),
        ('abc', 10),
        (1, 'ten'),
        (True, 10),
        (1, False),
    ])
    def test_invalid_input_rejected(self, page, limit):
        with pytest.raises(ValidationError) as exc_info:
            PaginationCalculator().window(page, limit)
        assert exc_info.value.error_enum is APIError.INVALID_PAGINATION

    def test_custom_max_limit(self):
        calculator = PaginationCalculator(default_limit=5, max_limit=20)
        assert calculator.window().limit == 5
        with pytest.raises(ValidationError):
            calculator.window(1, 21)


class TestTotalPages:

    @pytest.mark.parametrize('total, limit, expected', [
        (0, 10, 0),
        (1, 10, 1),
        (10, 10, 1),
        (11, 10, 2),
        (23, 10, 3),
    ])
    def test_ceiling(self, total, limit, expected):
        assert PaginationCalculator.total_pages(total, limit) == expected

    def test_page_info_has_next(self):
        calculator = PaginationCalculator()

        first = calculator.page_info(calculator.window(1, 10), 23)
        last = calculator.page_info(calculator.window(3, 10), 23)

        assert first.total_pages == 3 and first.has_next is True
        assert last.has_next is False

    def test_page_info_empty_result(self):
        calculator = PaginationCalculator()
        info = calculator.page_info(calculator.window(1, 10), None)

        assert info.to_dict() == {
            'page': 1,
            'limit': 10,
            'total': 0,
            'total_pages': 0,
            'has_next': False
        }
