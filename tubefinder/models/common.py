from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error_code: str
    message: str
    upstream_status: int | None = None
