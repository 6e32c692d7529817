"""
Workday Hub - WS-Security authenticated client for Workday HR web services.

Maintains worker contact information, photos and Workday accounts through the
Human_Resources SOAP API, capturing the raw request/response of every call.
"""

__version__ = "0.1.0"
