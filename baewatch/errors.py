# baewatch/errors.py

"""Exception hierarchy shared across baewatch modules."""


class BaewatchError(Exception):
    """Base class for all baewatch errors."""


class ConfigError(BaewatchError):
    """Credentials are missing, malformed, or still placeholders."""


class EbayApiError(BaewatchError):
    """An eBay endpoint failed or could not be reached."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class SearchError(BaewatchError):
    """A marketplace search could not be completed."""
