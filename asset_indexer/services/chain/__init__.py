"""Chain access."""

from .client import ChainClient
from .rpc_wrapper import rpc_call_with_retry, with_timeout

__all__ = ["ChainClient", "rpc_call_with_retry", "with_timeout"]
