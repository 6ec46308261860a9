"""Ambient infrastructure: configuration, exceptions, logging and CLI."""
