"""yammer: compose a docker compose file out of services hosted on GitHub."""

__version__ = "0.1.0"
