"""Create indexer tables.

Revision ID: 20261018_000001
Revises:
Create Date: 2026-10-18

Creates the event tables (transfers, KYC changes, oracle prices), the
users projection, the watched tokens registry and the scan checkpoint.
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261018_000001"
down_revision = None
branch_labels = None
depends_on = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("CURRENT_TIMESTAMP"),
        nullable=False,
    )


def upgrade() -> None:
    """Create indexer tables."""
    op.create_table(
        "transfer_events",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("tx_hash", sa.String(length=66), nullable=False),
        sa.Column("log_index", sa.Integer(), nullable=False),
        sa.Column("block_number", sa.BigInteger(), nullable=False),
        sa.Column("block_timestamp", sa.DateTime(timezone=True), nullable=True),
        sa.Column("from_address", sa.String(length=42), nullable=False),
        sa.Column("to_address", sa.String(length=42), nullable=False),
        sa.Column("token_address", sa.String(length=42), nullable=False),
        # uint256: amount for ERC20, decimal string token id for ERC721
        sa.Column("amount", sa.DECIMAL(precision=78, scale=0), nullable=True),
        sa.Column("token_id", sa.String(length=78), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "tx_hash", "log_index", name="uq_transfer_events_tx_log"
        ),
        sa.CheckConstraint(
            "(amount IS NULL) <> (token_id IS NULL)",
            name="check_transfer_amount_xor_token_id",
        ),
    )
    for column in ("block_number", "from_address", "to_address", "token_address"):
        op.create_index(
            f"ix_transfer_events_{column}", "transfer_events", [column]
        )

    op.create_table(
        "kyc_events",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_address", sa.String(length=42), nullable=False),
        sa.Column("action", sa.String(length=32), nullable=False),
        sa.Column("tx_hash", sa.String(length=66), nullable=False),
        sa.Column("log_index", sa.Integer(), nullable=False),
        sa.Column("block_number", sa.BigInteger(), nullable=False),
        sa.Column("block_timestamp", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("tx_hash", "log_index", name="uq_kyc_events_tx_log"),
    )
    op.create_index("ix_kyc_events_user_address", "kyc_events", ["user_address"])
    op.create_index("ix_kyc_events_block_number", "kyc_events", ["block_number"])

    op.create_table(
        "oracle_prices",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("price", sa.DECIMAL(precision=78, scale=0), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("tx_hash", sa.String(length=66), nullable=False),
        sa.Column("log_index", sa.Integer(), nullable=False),
        sa.Column("block_number", sa.BigInteger(), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "tx_hash", "log_index", name="uq_oracle_prices_tx_log"
        ),
    )
    op.create_index("ix_oracle_prices_timestamp", "oracle_prices", ["timestamp"])
    op.create_index(
        "ix_oracle_prices_block_number", "oracle_prices", ["block_number"]
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("address", sa.String(length=42), nullable=False),
        sa.Column(
            "is_whitelisted",
            sa.Boolean(),
            server_default=sa.false(),
            nullable=False,
        ),
        sa.Column(
            "is_blacklisted",
            sa.Boolean(),
            server_default=sa.false(),
            nullable=False,
        ),
        sa.Column(
            "kyc_status",
            sa.String(length=20),
            server_default="pending",
            nullable=False,
        ),
        sa.Column("email", sa.String(length=255), nullable=True),
        _created_at(),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_address", "users", ["address"], unique=True)

    op.create_table(
        "tokens",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("address", sa.String(length=42), nullable=False),
        sa.Column("standard", sa.String(length=10), nullable=False),
        sa.Column("name", sa.String(length=64), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_tokens_address", "tokens", ["address"], unique=True)

    op.create_table(
        "indexer_checkpoints",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=64), nullable=False),
        sa.Column(
            "last_processed_block",
            sa.BigInteger(),
            server_default="0",
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_indexer_checkpoints_name",
        "indexer_checkpoints",
        ["name"],
        unique=True,
    )


def downgrade() -> None:
    """Drop indexer tables."""
    op.drop_index("ix_indexer_checkpoints_name", table_name="indexer_checkpoints")
    op.drop_table("indexer_checkpoints")

    op.drop_index("ix_tokens_address", table_name="tokens")
    op.drop_table("tokens")

    op.drop_index("ix_users_address", table_name="users")
    op.drop_table("users")

    op.drop_index("ix_oracle_prices_block_number", table_name="oracle_prices")
    op.drop_index("ix_oracle_prices_timestamp", table_name="oracle_prices")
    op.drop_table("oracle_prices")

    op.drop_index("ix_kyc_events_block_number", table_name="kyc_events")
    op.drop_index("ix_kyc_events_user_address", table_name="kyc_events")
    op.drop_table("kyc_events")

    for column in ("token_address", "to_address", "from_address", "block_number"):
        op.drop_index(f"ix_transfer_events_{column}", table_name="transfer_events")
    op.drop_table("transfer_events")
