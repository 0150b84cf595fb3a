# backend/policy_files/schemas/upload.py
from pydantic import BaseModel

class UploadResponse(BaseModel):
    name: str
    url: str

class RecordedUploadResponse(UploadResponse):
    document_id: str
    message: str = "upload successfully"

class ErrorResponse(BaseModel):
    error: str
