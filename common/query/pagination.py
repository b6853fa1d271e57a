import math
from dataclasses import dataclass

from common.enum.error_code import APIError
from common.exception.exceptions import ValidationError

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


@dataclass(frozen=True)
class PageWindow:
    page: int
    limit: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class PageInfo:
    page: int
    limit: int
    total: int
    total_pages: int

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    def to_dict(self):
        return {
            'page': self.page,
            'limit': self.limit,
            'total': self.total,
            'total_pages': self.total_pages,
            'has_next': self.has_next
        }


class PaginationCalculator:

    def __init__(self, default_limit: int = DEFAULT_LIMIT, max_limit: int = MAX_LIMIT):
        self.default_limit = default_limit
        self.max_limit = max_limit

    def window(self, page=None, limit=None) -> PageWindow:
        page = DEFAULT_PAGE if page is None else page
        limit = self.default_limit if limit is None else limit

        if isinstance(page, bool) or isinstance(limit, bool):
            raise ValidationError(APIError.INVALID_PAGINATION)
        try:
            page = int(page)
            limit = int(limit)
        except (TypeError, ValueError):
            raise ValidationError(APIError.INVALID_PAGINATION)

        if page < 1 or limit < 1 or limit > self.max_limit:
            raise ValidationError(APIError.INVALID_PAGINATION)

        return PageWindow(page=page, limit=limit)

    @staticmethod
    def total_pages(total: int, limit: int) -> int:
        #NOTE: total 이 0 이면 0 페이지 (1 아님)
        if total <= 0:
            return 0
        return math.ceil(total / limit)

    def page_info(self, window: PageWindow, total: int) -> PageInfo:
        total = max(total or 0, 0)
        return PageInfo(
            page=window.page,
            limit=window.limit,
            total=total,
            total_pages=self.total_pages(total, window.limit)
        )
