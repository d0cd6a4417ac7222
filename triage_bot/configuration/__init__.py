"""Configuration loading and the command line interface."""
