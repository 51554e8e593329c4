"""
Event Decoder.

Side-effect free translation of raw contract logs into typed events.
"""

from .decoder import decode_kyc_change, decode_price_update, decode_transfer
from .events import (
    DecodedKycChange,
    DecodedPriceUpdate,
    DecodedTransfer,
    RawLog,
)
from .topics import (
    BLACKLIST_UPDATED_TOPIC,
    PRICE_UPDATED_TOPIC,
    TRANSFER_TOPIC,
    WHITELIST_UPDATED_TOPIC,
    topic_for,
)

__all__ = [
    "BLACKLIST_UPDATED_TOPIC",
    "DecodedKycChange",
    "DecodedPriceUpdate",
    "DecodedTransfer",
    "PRICE_UPDATED_TOPIC",
    "RawLog",
    "TRANSFER_TOPIC",
    "WHITELIST_UPDATED_TOPIC",
    "decode_kyc_change",
    "decode_price_update",
    "decode_transfer",
    "topic_for",
]
