"""
ValidateLicenseCommand.

Command to validate a license on behalf of the licensed software.
"""

import uuid
from dataclasses import dataclass
from typing import Optional

from core.domain.value_objects import RequestType
from licenses.domain.validation import ValidationContext


@dataclass
class ValidateLicenseCommand:
    """Command to run the validation pipeline for one request."""

    team_id: uuid.UUID
    context: ValidationContext
    request_type: RequestType = RequestType.VERIFY
    method: str = "POST"
    path: str = ""
    user_agent: Optional[str] = None
