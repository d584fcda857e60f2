"""Configuration helpers module."""
