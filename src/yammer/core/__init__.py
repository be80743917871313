"""Core of yammer: domain models, ports and the pure compose pipeline.

Nothing in here talks to the network, the terminal or the filesystem
directly; adapters are handed in through the ports in `interfaces`.
"""
