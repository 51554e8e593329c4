"""
Exception types.

Defines the error categories the indexer distinguishes between.
"""


class IndexerError(Exception):
    """Base exception for indexer errors."""
    pass


class ChainClientError(IndexerError):
    """Raised when an RPC call fails after all retries."""
    pass


class ChainTimeoutError(ChainClientError):
    """Raised when an RPC call times out."""
    pass


class DecodeError(IndexerError):
    """Raised when a log matches a filter but cannot be decoded."""

    def __init__(
        self,
        message: str,
        tx_hash: str | None = None,
        log_index: int | None = None,
    ) -> None:
        super().__init__(message)
        self.tx_hash = tx_hash
        self.log_index = log_index

    def __str__(self) -> str:
        base = super().__str__()
        if self.tx_hash is None:
            return base
        return f"{base} (tx={self.tx_hash}, log_index={self.log_index})"


class IndexerStartupError(IndexerError):
    """Raised when the scan loop cannot start (fatal)."""
    pass
