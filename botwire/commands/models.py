"""Pydantic models for commands declared in configuration."""

from typing import List, Optional, Union

from pydantic import BaseModel, Field


class CommandEntry(BaseModel):
    """One entry of the ``commands`` list in settings.yaml.

    Callbacks declared in configuration are always string identifiers;
    resolving them to code is up to the application.
    """

    pattern: str = Field(..., min_length=1, description="Message pattern")
    callback: str = Field(..., min_length=1, description="Callback identifier")
    recipient: Optional[str] = None
    driver: Optional[Union[str, List[str]]] = None
    stops_conversation: bool = False
    skips_conversation: bool = False
