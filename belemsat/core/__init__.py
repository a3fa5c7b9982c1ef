"""Logging, configuration, constants and the command line."""
