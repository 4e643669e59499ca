# app/schemas/base.py
from pydantic import BaseModel
from typing import List, Generic, Optional, TypeVar

T = TypeVar("T")


class Pagination(BaseModel):
    currentPage: int
    totalPages: int
    totalItems: int
    itemsPerPage: int


class PaginatedResponse(BaseModel, Generic[T]):
    success: bool = True
    data: List[T]
    pagination: Pagination


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: Optional[str] = None
