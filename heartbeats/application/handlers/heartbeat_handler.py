"""
RecordHeartbeatHandler.

A heartbeat is a validation that always carries a client identifier, so a
VALID heartbeat always holds a seat.
"""

from core.domain.value_objects import RequestType
from heartbeats.application.commands.record_heartbeat import RecordHeartbeatCommand
from licenses.application.commands.validate_license import ValidateLicenseCommand
from licenses.application.dto.license_dto import ValidationResultDTO
from licenses.application.handlers.validate_license_handler import ValidateLicenseHandler
from licenses.domain.validation import ValidationContext


class RecordHeartbeatHandler:
    """Handler for RecordHeartbeatCommand."""

    def __init__(self, validate_handler: ValidateLicenseHandler):
        """Initialize handler with the validation handler it delegates to."""
        self.validate_handler = validate_handler

    async def handle(self, command: RecordHeartbeatCommand) -> ValidationResultDTO:
        """
        Handle record heartbeat command.

        Args:
            command: RecordHeartbeatCommand

        Returns:
            ValidationResultDTO
        """
        if not command.client_identifier:
            raise ValueError("Client identifier is required")

        return await self.validate_handler.handle(
            ValidateLicenseCommand(
                team_id=command.team_id,
                context=ValidationContext(
                    license_key=command.license_key,
                    client_identifier=command.client_identifier,
                    ip_address=command.ip_address,
                    customer_id=command.customer_id,
                    product_id=command.product_id,
                    challenge=command.challenge,
                ),
                request_type=RequestType.HEARTBEAT,
                method=command.method,
                path=command.path,
                user_agent=command.user_agent,
            )
        )
