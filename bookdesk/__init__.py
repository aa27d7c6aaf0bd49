"""Book Desk - client for a remote book catalog service

This package contains:
- Book record (book.py)
- Form state and controller (form.py)
- Book table renderer (table.py)
- Message slot (messages.py)
- Book API client and HTTP client (services/)
- Validators and terminal helpers (utils/)
"""
