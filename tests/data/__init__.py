"""Test data modules."""
