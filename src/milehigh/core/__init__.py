"""Configuration, logging and event infrastructure."""
