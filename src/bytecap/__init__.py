"""bytecap - warn before workspace files outgrow an upload size cap."""

__version__ = "0.1.0"
