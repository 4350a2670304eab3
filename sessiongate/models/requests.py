"""
Request models for the session API.

Pattern: Pydantic validation
"""

from typing import Any

from pydantic import BaseModel, Field


class SessionValueRequest(BaseModel):
    """
    Body of PUT /v1/session/values/{key}.

    Attributes:
        value: Any JSON value to store under the key.
    """

    value: Any = Field(
        ...,
        description="Value to store in the session",
    )
