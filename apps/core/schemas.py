"""Response envelope pieces shared by every app."""
from typing import Optional
from ninja import Schema


class Envelope(Schema):
    success: bool = True
    message: Optional[str] = None


class MessageOut(Envelope):
    pass


class PaginationOut(Schema):
    currentPage: int
    totalPages: int
    limit: int


def envelope(data=None, message: Optional[str] = None) -> dict:
    body = {'success': True, 'message': message}
    if data is not None:
        body['data'] = data
    return body


def pagination(page, total: int, total_key: str) -> dict:
    return {
        'currentPage': page.page,
        'totalPages': page.total_pages(total),
        total_key: total,
        'limit': page.limit,
    }
