"""Configuration: settings, section models, and logging setup."""
