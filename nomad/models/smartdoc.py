from typing import Any

from pydantic import BaseModel, Field


class SmartDocConvert(BaseModel):
    """Request model for converting one SmartDoc to Markdown."""
    document: dict[str, Any] = Field(..., description="SmartDoc object (data, html, preview)")


class SmartDocMarkdown(BaseModel):
    """Response model for a converted SmartDoc."""
    markdown: str = Field("", description="Rendered Markdown")


class RecordConvert(BaseModel):
    """Request model for converting every SmartDoc field of a record."""
    record: dict[str, Any] = Field(default={}, description="Record fields by name")


class RecordConvertResponse(BaseModel):
    """Response model with one <field>_markdown entry per converted field."""
    fields: dict[str, str] = Field(default={}, description="Rendered fields")
