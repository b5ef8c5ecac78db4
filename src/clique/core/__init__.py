"""Shared infrastructure: exceptions, configuration and YAML loading."""
