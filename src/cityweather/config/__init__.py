"""Configuration for the city weather client."""
