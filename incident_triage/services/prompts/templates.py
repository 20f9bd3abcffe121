"""
Template name constants.

Pure constants - no I/O or file system knowledge.
"""


class Template:
    """Template name constants. Use these instead of raw strings."""

    SUMMARIZE_SYSTEM = "summarize_system"
    SUMMARIZE_INCIDENT = "summarize_incident"
