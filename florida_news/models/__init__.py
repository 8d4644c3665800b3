"""Data models for florida_news."""
