"""Shared utilities: logging, orientation classification, memoization keys."""
