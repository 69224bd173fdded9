"""Built-in drivers."""

import structlog

from .interfaces import Driver

logger = structlog.get_logger("botwire.drivers")


class NullDriver(Driver):
    """Driver used when no real transport is available.

    Never reports itself as configured and discards outgoing messages.
    """

    def is_configured(self) -> bool:
        return False

    async def send_message(self, recipient: str, text: str) -> None:
        logger.debug("null_driver_message_dropped", recipient=recipient, length=len(text))
