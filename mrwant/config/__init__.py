"""Configuration for Mr. Want: constants and environment-driven settings."""
