"""Malcolm: live terminal viewer for proxied HTTP exchanges."""

__version__ = "0.1.0"
