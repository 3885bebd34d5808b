"""Configuration loading, validation and store wiring."""
