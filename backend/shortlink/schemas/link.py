from datetime import datetime

from pydantic import BaseModel, Field


class LinkCreate(BaseModel):
    """Schema for creating a new short link"""
    long_url: str = Field(..., description="Original URL to shorten")


class LinkResponse(BaseModel):
    """Schema for a created short link"""
    id: int
    code: str
    long_url: str
    short_url: str
    created_at: datetime

    class Config:
        from_attributes = True


class ResolveResponse(BaseModel):
    """Schema for a resolved code"""
    code: str
    long_url: str


class ErrorResponse(BaseModel):
    """Schema for error bodies"""
    detail: str
    error: str


class HealthResponse(BaseModel):
    """Schema for health check"""
    status: str
    database: bool
