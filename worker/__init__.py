"""Indexer worker process."""
