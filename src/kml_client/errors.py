"""Exception hierarchy shared by the client, render and CLI layers."""
from __future__ import annotations


class KmlClientError(RuntimeError):
    """Base client error."""


class TransportUnavailableError(KmlClientError):
    """Every HTTP client construction attempt failed."""

    user_message = "Your environment does not support HTTP requests!"

    def __init__(self, causes: list[BaseException] | None = None) -> None:
        self.causes = list(causes or [])
        super().__init__(self.user_message)


class ConfigError(KmlClientError):
    """A setting could not be interpreted."""


class ElementNotFoundError(KmlClientError, KeyError):
    """No page element with the requested id."""

    def __str__(self) -> str:
        return f"no element with id {self.args[0]!r}"


__all__ = ["ConfigError", "ElementNotFoundError", "KmlClientError", "TransportUnavailableError"]
