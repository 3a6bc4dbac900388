"""Shared infrastructure: logging, exceptions, clock and AWS sessions."""
