"""Adapters: everything that does I/O (HTTP, YAML text, disk)."""
