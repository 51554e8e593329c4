"""
Standard type definitions for database models.

Provides consistent types for on-chain values across all models.
"""

from decimal import Decimal

from sqlalchemy import DECIMAL, String
from sqlalchemy.types import TypeDecorator


class Uint256(TypeDecorator):
    """
    Unsigned 256-bit integer stored without loss of precision.

    NUMERIC(78, 0) on PostgreSQL. SQLite has no exact numeric storage
    beyond 64 bits, so values are kept as decimal strings there.
    Always read back as Decimal.
    """

    impl = DECIMAL
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "sqlite":
            return dialect.type_descriptor(String(78))
        return super().load_dialect_impl(dialect)

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if dialect.name == "sqlite":
            return str(int(value))
        return Decimal(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)


# Token amounts, token ids and oracle prices
# Precision: 78 digits, no fractional part
# Range: 0 to 2**256 - 1
Uint256Type = Uint256(78, 0)

# Checksummed EVM address (0x + 40 hex)
AddressType = String(42)

# Transaction hash (0x + 64 hex)
TxHashType = String(66)
