"""Pytest configuration and shared fixtures for all tests."""

import os
import sys
from pathlib import Path

# Minimal environment for Settings validation
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("RPC_URL", "http://localhost:8545")
os.environ.setdefault(
    "FUND_TOKEN_ADDRESS", "0x1111111111111111111111111111111111111111"
)
os.environ.setdefault(
    "CERTIFICATE_NFT_ADDRESS", "0x2222222222222222222222222222222222222222"
)
os.environ.setdefault(
    "KYC_REGISTRY_ADDRESS", "0x3333333333333333333333333333333333333333"
)
os.environ.setdefault(
    "ORACLE_ADDRESS", "0x4444444444444444444444444444444444444444"
)

# Add project root to PYTHONPATH
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from asset_indexer.config.database import create_session_maker  # noqa: E402
from asset_indexer.config.settings import (  # noqa: E402
    ContractAddresses,
    IndexerConfig,
)
from asset_indexer.models import Base  # noqa: E402
from tests.factories import (  # noqa: E402
    CERTIFICATE_NFT,
    FUND_TOKEN,
    KYC_REGISTRY,
    ORACLE,
)


@pytest.fixture
def contracts():
    """All four watched contracts configured."""
    return ContractAddresses(
        fund_token=FUND_TOKEN,
        certificate_nft=CERTIFICATE_NFT,
        kyc_registry=KYC_REGISTRY,
        oracle=ORACLE,
    )


@pytest.fixture
def indexer_config(contracts):
    """Indexer config with batch size 10 and a short poll interval."""
    return IndexerConfig(contracts=contracts, batch_size=10, poll_interval=0.01)


@pytest.fixture
def mock_chain():
    """Mock ChainClient returning no logs at height 0."""
    chain = AsyncMock()
    chain.get_block_number = AsyncMock(return_value=0)
    chain.get_logs = AsyncMock(return_value=[])
    chain.get_block_timestamp = AsyncMock(return_value=None)
    chain.close = AsyncMock()
    return chain


@pytest_asyncio.fixture
async def db_engine():
    """In-memory SQLite engine with all tables created."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(db_engine):
    """Session factory bound to the in-memory engine."""
    return create_session_maker(db_engine)


@pytest_asyncio.fixture
async def db_session(session_maker):
    """Single session for repository tests."""
    async with session_maker() as session:
        yield session
