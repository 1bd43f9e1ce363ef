"""Reporters for traversal output."""

from .text_reporter import TextReporter

__all__ = ["TextReporter"]
