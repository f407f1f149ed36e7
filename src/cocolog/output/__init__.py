"""Renderers for parsed commits — terminal, JSON, YAML."""
