"""
Response envelope shared by every action-style endpoint.
"""

from pydantic import BaseModel


class ActionResult(BaseModel):
    """`{success, message}` envelope returned to the UI."""
    success: bool
    message: str = ""
