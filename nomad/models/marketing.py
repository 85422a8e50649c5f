from pydantic import BaseModel, Field


class BentoEvent(BaseModel):
    """A single Bento event."""
    email: str = Field(..., description="Subscriber email address")
    type: str = Field("$direct_download", description="Bento event type")
    details: dict[str, str] = Field(default={}, description="Event details")


class BentoBatch(BaseModel):
    """Request body for the Bento batch events endpoint."""
    site_uuid: str = Field(..., description="Bento site UUID")
    events: list[BentoEvent] = Field(default=[], description="Events to record")
