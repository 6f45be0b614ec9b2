"""
Response envelopes for the file and archive routes.
"""

from typing import List

from pydantic import BaseModel


class CompressResponse(BaseModel):
    message: str
    zip_uri: str


class CompressManyResponse(CompressResponse):
    file_count: int


class ExtractResponse(BaseModel):
    message: str
    extracted_uri: str


class ArchiveList(BaseModel):
    files: List[str]
    total_files: int
