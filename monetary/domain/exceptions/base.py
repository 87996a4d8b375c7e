class MonetaryError(Exception):
    """Base exception for every error raised by the library."""

    category: str = "MonetaryError"
    recoverable: bool = False

    def is_recoverable(self) -> bool:
        return self.recoverable
