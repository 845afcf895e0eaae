"""Data models for sweep operations."""
