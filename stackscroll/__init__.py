"""StackScroll - a small blogging client over a hosted auth + posts table."""

__version__ = "0.1.0"
