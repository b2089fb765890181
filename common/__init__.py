"""Shared infrastructure (logging, config, filesystem helpers) for sanitize-fs."""
