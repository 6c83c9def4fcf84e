"""Accessibility audits with generated remediation suggestions.

A run loads a page in Chromium, collects axe-core violations, turns the first
five into a prompt, asks a text-generation provider for fixes and keeps only
the well-formed suggestion blocks.
"""

from .logging_config import configure_logging

__all__ = ["configure_logging"]
