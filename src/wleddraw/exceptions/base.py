"""Root of the wleddraw exception hierarchy.

Errors carry two messages because they end up in two places: the CLI
prints ``user_message`` (plus ``recovery_hint`` when there is one) and the
rotating log file gets ``technical_message``, which names the URL, file or
raw value involved. ``recoverable`` tells the services whether drawing can
go on, e.g. without the device or with default settings.
"""

from typing import Optional


class WledDrawError(Exception):
    """
    Base for every error raised by wleddraw.

    ``str(error)`` is the user message, so a bare ``click.echo(error)``
    never shows a stack-trace style message.
    """

    def __init__(
        self,
        user_message: str,
        technical_message: Optional[str] = None,
        recoverable: bool = False,
        recovery_hint: Optional[str] = None,
        *args,
        **kwargs
    ):
        super().__init__(user_message, *args, **kwargs)
        self.user_message = user_message
        self.technical_message = technical_message or user_message
        self.recoverable = recoverable
        self.recovery_hint = recovery_hint

    def __str__(self) -> str:
        return self.user_message

    def get_full_message(self) -> str:
        """User message followed by the recovery hint, as the CLI shows it."""
        if not self.recovery_hint:
            return self.user_message
        return f"{self.user_message}\n\nSuggestion: {self.recovery_hint}"
