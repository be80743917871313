"""Domain models and errors.

Plain data and the rules that apply to it; no HTTP, YAML text or CLI here.
"""
