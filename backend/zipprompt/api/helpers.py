"""
Shared route helpers
"""
from fastapi import HTTPException, status


class ResourceNotFoundError(HTTPException):
    """Resource not found with standardized message"""
    def __init__(self, resource: str, resource_id):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource} '{resource_id}' not found"
        )
