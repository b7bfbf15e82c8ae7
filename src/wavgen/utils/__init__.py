"""Unit parsing and file naming helpers."""
