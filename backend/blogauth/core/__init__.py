"""Core infrastructure: config, extensions, logging, errors and security wiring."""
