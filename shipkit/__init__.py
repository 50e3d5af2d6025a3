"""shipkit: release notes and web bundle packaging for app releases."""

__version__ = "0.3.0"
