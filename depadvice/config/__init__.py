"""User configuration: logical dependency groups and advice settings."""
