from typing import Optional


class ProviderUnavailableError(Exception):
    """The identity provider could not be reached or refused the lookup."""

    def __init__(self, message: str, external_id: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.external_id = external_id
        self.status_code = status_code
