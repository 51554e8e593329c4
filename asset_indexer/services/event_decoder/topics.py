"""
Event topics.

topic0 of a log is the keccak hash of the event signature.
"""

from web3 import Web3

from asset_indexer.config.constants import (
    BLACKLIST_UPDATED_SIGNATURE,
    PRICE_UPDATED_SIGNATURE,
    TRANSFER_EVENT_SIGNATURE,
    WHITELIST_UPDATED_SIGNATURE,
)


def topic_for(signature: str) -> str:
    """
    Compute topic0 for an event signature.

    Examples:
        >>> topic_for("Transfer(address,address,uint256)")
        '0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef'
    """
    return Web3.to_hex(Web3.keccak(text=signature))


TRANSFER_TOPIC = topic_for(TRANSFER_EVENT_SIGNATURE)
WHITELIST_UPDATED_TOPIC = topic_for(WHITELIST_UPDATED_SIGNATURE)
BLACKLIST_UPDATED_TOPIC = topic_for(BLACKLIST_UPDATED_SIGNATURE)
PRICE_UPDATED_TOPIC = topic_for(PRICE_UPDATED_SIGNATURE)
