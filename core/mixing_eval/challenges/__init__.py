"""Bundled mixing challenge catalog (YAML). Loaded by _challenge_loader.py."""
