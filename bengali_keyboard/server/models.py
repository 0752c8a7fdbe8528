"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for request validation,
response serialization, and automatic OpenAPI documentation.

HOW: Each endpoint pair (request + response) has its own model. The edit
action kind reuses the core's str-Enum so the wire values are the same
strings the core uses.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
- EditActionKind is imported from core.session (single source of truth)
- A key's char is one character, or the word "backspace"
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from bengali_keyboard.core.session import EditActionKind

BACKSPACE_NAME = "backspace"
"""Wire name for the backspace key in KeyRequest.char."""


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class ConvertRequest(BaseModel):
    """Free text to convert in one call."""

    text: str = Field(description="Phonetic Latin text, e.g. 'ami banglay gan gai'.")


class SessionCreateRequest(BaseModel):
    """Options for a new typing session."""

    enabled: Optional[bool] = Field(
        default=None,
        description="Initial enabled state. Defaults to BENGALI_KEYBOARD_ENABLED.",
    )


class KeyRequest(BaseModel):
    """One keystroke sent to a session.

    RULES:
    - char is a single character as typed, "\\n" and "\\t" included
    - char "backspace" is the backspace key
    - is_key_down False is a key release, which changes nothing
    """

    char: str = Field(
        min_length=1,
        description="The typed character, or 'backspace' for the backspace key.",
    )
    is_key_down: bool = Field(
        default=True,
        description="False for a key release event.",
    )


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class ConvertResponse(BaseModel):
    """Result of converting free text."""

    text: str = Field(description="The input text.")
    output: str = Field(description="The Bengali text.")

    model_config = {"json_schema_extra": {
        "examples": [{"text": "ami bangla", "output": "আমি বাংলা"}]
    }}


class PatternInfo(BaseModel):
    """One entry of the pattern table."""

    pattern: str = Field(description="Latin key sequence.")
    script: str = Field(description="Bengali output.")
    is_vowel: bool = Field(description="True for vowel patterns.")
    diacritic: Optional[str] = Field(
        default=None,
        description="Dependent vowel sign used after a consonant, if any.",
    )


class SessionResponse(BaseModel):
    """State of a typing session."""

    id: str = Field(description="Unique session identifier.")
    enabled: bool = Field(description="Whether conversion is switched on.")
    pending: str = Field(description="Characters buffered since the last word boundary.")
    created_at: float = Field(description="Creation timestamp (Unix epoch seconds).")


class EditActionResponse(BaseModel):
    """The edit the client must perform for a keystroke.

    RULES:
    - pass_through: type the key normally
    - suppress: swallow the key
    - replace: swallow the key, delete delete_count characters before the
      cursor, insert insert_text, then type terminal_char
    """

    kind: EditActionKind = Field(description="What to do with the key.")
    delete_count: int = Field(default=0, description="Characters to delete before the cursor.")
    insert_text: str = Field(default="", description="Text to insert after deleting.")
    terminal_char: str = Field(default="", description="Character to type after inserting.")
    suppress_key: bool = Field(description="True if the original key must be swallowed.")

    model_config = {"json_schema_extra": {
        "examples": [{
            "kind": "replace",
            "delete_count": 2,
            "insert_text": "কা",
            "terminal_char": " ",
            "suppress_key": True,
        }]
    }}


class ErrorResponse(BaseModel):
    """Standard error response body."""

    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
    sessions: int = Field(description="Number of live typing sessions.")
