"""Notification dialog with action buttons that run shell commands."""

__version__ = "0.1.0"

PROGRAM_NAME = "options-window"
