"""Command-line interface for Workday Hub."""
