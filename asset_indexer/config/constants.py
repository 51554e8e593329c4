"""
Indexer constants.

Centralized constants for chain access and scanning.
"""

# ========================================================================
# BLOCKCHAIN CONSTANTS
# ========================================================================

# Blockchain operation timeouts (in seconds)
BLOCKCHAIN_TIMEOUT = 30.0  # Standard RPC operations (block number, logs, blocks)

# Blockchain retry settings
BLOCKCHAIN_MAX_RETRIES = 3  # Attempts per RPC call before the cycle gives up
BLOCKCHAIN_RETRY_DELAY_BASE = 2  # Base delay in seconds for exponential backoff

# ========================================================================
# INDEXER CONSTANTS
# ========================================================================

# Scanning defaults
INDEXER_BATCH_SIZE = 10  # Blocks per batch
INDEXER_POLL_INTERVAL = 20.0  # Seconds between scan cycles

# Name of the checkpoint row owned by the scan loop
INDEXER_CHECKPOINT_NAME = "chain_indexer"

# ========================================================================
# EVENT SIGNATURES
# ========================================================================

TRANSFER_EVENT_SIGNATURE = "Transfer(address,address,uint256)"
WHITELIST_UPDATED_SIGNATURE = "WhitelistUpdated(address,bool)"
BLACKLIST_UPDATED_SIGNATURE = "BlacklistUpdated(address,bool)"
PRICE_UPDATED_SIGNATURE = "PriceUpdated(uint256,uint256)"

# Oracle prices are fixed-point thousandths of the quoted currency
ORACLE_PRICE_SCALE = 1000
