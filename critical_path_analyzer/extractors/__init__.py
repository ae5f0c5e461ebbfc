"""Data extraction utilities for span and transaction documents."""

from .item_extractor import ItemExtractor

__all__ = ["ItemExtractor"]
