from pydantic import BaseModel, Field


class DownloadRequest(BaseModel):
    """State of a single gated download request."""
    path: str = Field("", description="Requested object key, without leading slashes")
    password: str | None = Field(None, description="Submitted password")
    email: str | None = Field(None, description="Submitted email address")
    download: bool = Field(False, description="Whether the file bytes were requested (?download=1)")
