from .download import DownloadRequest
from .marketing import BentoEvent, BentoBatch
from .smartdoc import SmartDocConvert, SmartDocMarkdown, RecordConvert, RecordConvertResponse

__all__ = [
    # Download
    "DownloadRequest",
    # Marketing
    "BentoEvent",
    "BentoBatch",
    # SmartDoc
    "SmartDocConvert",
    "SmartDocMarkdown",
    "RecordConvert",
    "RecordConvertResponse",
]
