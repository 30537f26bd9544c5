"""
Response Envelope Helpers
Uniform {success, data, error, message, pagination} dictionaries returned by
repositories, the database manager and the service facade
"""

import math
from typing import Any, Dict, Optional


def success_response(data: Any = None, message: str = None,
                     pagination: Dict[str, int] = None) -> Dict[str, Any]:
    """Build a success envelope, omitting keys that were not supplied."""
    response: Dict[str, Any] = {'success': True}
    if data is not None:
        response['data'] = data
    if message:
        response['message'] = message
    if pagination is not None:
        response['pagination'] = pagination
    return response


def error_response(error: str) -> Dict[str, Any]:
    """Build a failure envelope carrying a plain error message."""
    return {'success': False, 'error': error}


def build_pagination(total: int, page: int, limit: int) -> Dict[str, int]:
    """Pagination block for paged list responses."""
    return {
        'total': total,
        'page': page,
        'limit': limit,
        'total_pages': math.ceil(total / limit) if limit else 0,
    }


def unwrap(response: Dict[str, Any], default: Optional[Any] = None) -> Any:
    """Return the envelope's data on success, otherwise the default."""
    if response.get('success'):
        return response.get('data', default)
    return default
