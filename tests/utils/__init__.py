"""Test utility modules."""
