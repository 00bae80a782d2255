"""
Social API: Pydantic Response Schemas
=====================================

What:  Pydantic models defining what the API returns.
How:   Services build these from selected rows; FastAPI serializes them and
       documents them in the OpenAPI schema.

The post body deliberately mirrors the selected columns (id, content, likes,
created). The soft-delete flag is internal and never serialized.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class PostResponse(BaseModel):
    """
    What:  JSON representation of one post.
    Who:   Returned by every /posts.* endpoint except the list, which returns
           an array of these.
    """
    id: int = Field(description="Post identifier")
    content: str = Field(description="Post text")
    likes: int = Field(description="Like counter (likes minus dislikes)")
    created: datetime = Field(description="When the post was created (ISO 8601)")

    model_config = {"from_attributes": True}


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and database status.
    Who:   Returned by GET /health.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
