"""Shared utilities for bulk_uploader."""
