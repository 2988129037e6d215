# classstore/api/errors.py
from fastapi import HTTPException

from classstore.domain.errors import MarketplaceError


def http_error(e: MarketplaceError) -> HTTPException:
    """Maps a service-layer error onto the HTTP status it carries."""
    return HTTPException(status_code=e.status_code, detail=str(e))
