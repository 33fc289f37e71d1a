"""Error response schema.

All error responses share one envelope: {"success": false, "error": "..."}.
The translator in devcamper.errors builds it from application errors.
"""

from typing import Literal

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    success: Literal[False] = False
    error: str
