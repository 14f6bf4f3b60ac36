"""Core stockboard functionality."""
