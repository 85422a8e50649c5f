from fastapi import APIRouter

from .. import smartdoc
from ..models import SmartDocConvert, SmartDocMarkdown, RecordConvert, RecordConvertResponse

router = APIRouter(prefix="/smartdoc", tags=["SmartDoc"])


@router.post("/markdown", response_model=SmartDocMarkdown)
async def convert_document(request: SmartDocConvert):
    """Convert a single SmartDoc object to Markdown."""
    return SmartDocMarkdown(markdown=smartdoc.render(request.document))


@router.post("/fields", response_model=RecordConvertResponse)
async def convert_record(request: RecordConvert):
    """Convert every SmartDoc field of a record into <field>_markdown entries."""
    return RecordConvertResponse(fields=smartdoc.convert_all_fields(request.record))
