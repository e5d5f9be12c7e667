"""Serialization, persistence and the mutation layer."""
