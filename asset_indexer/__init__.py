"""
Asset Indexer.

Mirrors on-chain activity of the fund token, certificate NFT, KYC registry
and price oracle contracts into a relational store.
"""

__version__ = "0.1.0"
