"""Adapters – concrete implementations of the store port."""
