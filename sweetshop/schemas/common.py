from typing import Optional
from pydantic import BaseModel

class ApiResponse(BaseModel):
    """Envelope shared by every endpoint: {success, message?, data?}."""
    success: bool = True
    message: Optional[str] = None

class HealthData(BaseModel):
    status: str
    database: str
    timestamp: str

class HealthResponse(ApiResponse):
    data: HealthData
