"""Book Desk - Services Package

This package contains service modules for the remote book API:
- Book API client
- HTTP client abstraction
"""
