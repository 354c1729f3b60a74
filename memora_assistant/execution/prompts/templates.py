"""
Template name constants.

Pure constants - no I/O or file system knowledge.
"""


class Template:
    """Template name constants. Use these instead of raw strings."""

    FLOW_START = "flow_start"
    FLOW_SUMMARY = "flow_summary"
    FLOW_COMPLETED = "flow_completed"
    HELP = "help"
    WELCOME = "welcome"
