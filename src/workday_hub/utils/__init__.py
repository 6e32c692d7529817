"""Shared utilities for Workday Hub."""
