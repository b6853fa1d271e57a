"""
Query package
aggregation 파이프라인 조립, 페이지 계산, 조인 projection
"""

from flask import current_app, has_app_context

from common.query.pagination import PaginationCalculator, PageWindow, PageInfo, DEFAULT_LIMIT, MAX_LIMIT


def get_pagination_calculator() -> PaginationCalculator:
    if has_app_context():
        return PaginationCalculator(
            default_limit=current_app.config.get('DEFAULT_PAGE_LIMIT', DEFAULT_LIMIT),
            max_limit=current_app.config.get('MAX_PAGE_LIMIT', MAX_LIMIT)
        )
    return PaginationCalculator()


__all__ = [
    'PaginationCalculator',
    'PageWindow',
    'PageInfo',
    'get_pagination_calculator'
]
