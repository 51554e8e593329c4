"""Unit tests for the event decoder."""

from datetime import UTC, datetime

import pytest
from web3 import Web3

from asset_indexer.models.enums import KycAction, KycListKind, TokenStandard
from asset_indexer.services.event_decoder import (
    TRANSFER_TOPIC,
    WHITELIST_UPDATED_TOPIC,
    decode_kyc_change,
    decode_price_update,
    decode_transfer,
)
from asset_indexer.utils.exceptions import DecodeError
from tests.factories import (
    ALICE,
    BOB,
    CERTIFICATE_NFT,
    FUND_TOKEN,
    KYC_REGISTRY,
    ZERO,
    address_topic,
    kyc_log,
    make_log,
    price_log,
    transfer_log,
    tx_hash,
    word,
)


class TestTopics:
    """Tests for event signature hashes."""

    def test_transfer_topic(self):
        """Transfer topic is the well-known ERC-20/721 hash."""
        assert TRANSFER_TOPIC == (
            "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"
        )

    def test_whitelist_topic_matches_keccak(self):
        """Registry topic is keccak of the canonical signature."""
        expected = Web3.to_hex(Web3.keccak(text="WhitelistUpdated(address,bool)"))
        assert WHITELIST_UPDATED_TOPIC == expected


class TestDecodeTransfer:
    """Tests for Transfer decoding."""

    def test_erc20_amount_from_data(self):
        """Fungible value is read from data."""
        log = transfer_log(sender=ALICE, recipient=BOB, value=10**18)

        event = decode_transfer(log, TokenStandard.ERC20)

        assert event.from_address == ALICE
        assert event.to_address == BOB
        assert event.amount == 10**18
        assert event.token_id is None
        assert event.token_address == FUND_TOKEN
        assert event.tx_hash == tx_hash(1)
        assert event.block_timestamp is None

    def test_erc20_empty_data_is_zero(self):
        """Empty payload decodes as zero."""
        log = make_log(
            FUND_TOKEN,
            [TRANSFER_TOPIC, address_topic(ALICE), address_topic(BOB)],
            "0x",
        )

        event = decode_transfer(log, TokenStandard.ERC20)

        assert event.amount == 0

    def test_nft_empty_data_gives_token_zero(self):
        """Certificate transfer with empty data gives token id "0"."""
        log = make_log(
            CERTIFICATE_NFT,
            [TRANSFER_TOPIC, address_topic(ZERO), address_topic(ALICE)],
            "0x",
        )

        event = decode_transfer(log, TokenStandard.ERC721)

        assert event.token_id == "0"
        assert event.amount is None
        assert event.from_address == ZERO

    def test_nft_token_id_from_indexed_topic(self):
        """Standard ERC-721 logs index the token id."""
        log = transfer_log(
            token=CERTIFICATE_NFT,
            sender=ALICE,
            recipient=BOB,
            value=42,
            indexed_value=True,
        )

        event = decode_transfer(log, TokenStandard.ERC721)

        assert event.token_id == "42"
        assert event.amount is None

    def test_nft_token_id_beyond_int64(self):
        """Token ids keep full uint256 precision."""
        big = 2**200 + 7
        log = transfer_log(token=CERTIFICATE_NFT, value=big)

        event = decode_transfer(log, TokenStandard.ERC721)

        assert event.token_id == str(big)

    def test_addresses_are_checksummed(self):
        """Addresses from topics are returned in checksum form."""
        log = transfer_log(sender=ALICE.lower(), recipient=BOB.lower())

        event = decode_transfer(log, TokenStandard.ERC20)

        assert event.from_address == ALICE
        assert event.to_address == BOB

    @pytest.mark.parametrize("topic_count", [1, 2, 5])
    def test_wrong_topic_count(self, topic_count):
        """Only 3 or 4 topics are accepted."""
        topics = [TRANSFER_TOPIC] + [address_topic(ALICE)] * (topic_count - 1)
        log = make_log(FUND_TOKEN, topics, word(1))

        with pytest.raises(DecodeError):
            decode_transfer(log, TokenStandard.ERC20)

    def test_short_topic(self):
        """Topics must be 32-byte words."""
        log = make_log(
            FUND_TOKEN, [TRANSFER_TOPIC, "0x1234", address_topic(BOB)], word(1)
        )

        with pytest.raises(DecodeError):
            decode_transfer(log, TokenStandard.ERC20)

    def test_non_hex_topic(self):
        """Malformed hex is a decode error, not a crash."""
        log = make_log(
            FUND_TOKEN,
            [TRANSFER_TOPIC, "0x" + "zz" * 32, address_topic(BOB)],
            word(1),
        )

        with pytest.raises(DecodeError):
            decode_transfer(log, TokenStandard.ERC20)

    def test_truncated_data(self):
        """Data shorter than one word cannot be decoded."""
        log = make_log(
            FUND_TOKEN,
            [TRANSFER_TOPIC, address_topic(ALICE), address_topic(BOB)],
            "0x1234",
        )

        with pytest.raises(DecodeError) as exc_info:
            decode_transfer(log, TokenStandard.ERC20)

        assert exc_info.value.tx_hash == tx_hash(1)
        assert exc_info.value.log_index == 0


class TestDecodeKycChange:
    """Tests for WhitelistUpdated / BlacklistUpdated decoding."""

    def test_whitelist_added(self):
        """Whitelist true gives whitelist_added."""
        event = decode_kyc_change(kyc_log(user=ALICE, status=True), KycListKind.WHITELIST)

        assert event.user_address == ALICE
        assert event.status is True
        assert event.action == KycAction.WHITELIST_ADDED

    def test_blacklist_removed(self):
        """Blacklist false gives blacklist_removed."""
        log = kyc_log(user=BOB, status=False, blacklist=True)

        event = decode_kyc_change(log, KycListKind.BLACKLIST)

        assert event.user_address == BOB
        assert event.status is False
        assert event.action == KycAction.BLACKLIST_REMOVED

    def test_missing_user_topic(self):
        """User address must be indexed."""
        log = make_log(KYC_REGISTRY, [WHITELIST_UPDATED_TOPIC], word(1))

        with pytest.raises(DecodeError):
            decode_kyc_change(log, KycListKind.WHITELIST)

    def test_non_boolean_payload(self):
        """Status word other than 0 or 1 is rejected."""
        log = make_log(
            KYC_REGISTRY,
            [WHITELIST_UPDATED_TOPIC, address_topic(ALICE)],
            word(2),
        )

        with pytest.raises(DecodeError):
            decode_kyc_change(log, KycListKind.WHITELIST)

    def test_empty_payload(self):
        """Status flag is required."""
        log = make_log(
            KYC_REGISTRY,
            [WHITELIST_UPDATED_TOPIC, address_topic(ALICE)],
            "0x",
        )

        with pytest.raises(DecodeError):
            decode_kyc_change(log, KycListKind.WHITELIST)


class TestDecodePriceUpdate:
    """Tests for PriceUpdated decoding."""

    def test_price_and_timestamp(self):
        """Price from topic, timestamp from data as UTC."""
        event = decode_price_update(price_log(price=1000, timestamp=1_700_000_000))

        assert event.price == 1000
        assert event.timestamp == datetime(2023, 11, 14, 22, 13, 20, tzinfo=UTC)
        assert event.timestamp.isoformat() == "2023-11-14T22:13:20+00:00"

    def test_price_is_plain_integer(self):
        """Indexed price is not interpreted as an address."""
        big_price = 2**160 + 5
        event = decode_price_update(price_log(price=big_price))

        assert event.price == big_price

    def test_missing_timestamp(self):
        """Empty payload is rejected."""
        log = price_log()
        log = make_log(log.address, log.topics, "0x")

        with pytest.raises(DecodeError):
            decode_price_update(log)

    def test_timestamp_out_of_range(self):
        """Unrepresentable timestamps are a decode error."""
        with pytest.raises(DecodeError):
            decode_price_update(price_log(timestamp=2**255))
