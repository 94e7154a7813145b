"""
Adapters package - External service connections.
Outgoing e-mail (SMTP) adapter.
"""

from adapters import mail_adapter

__all__ = [
    "mail_adapter",
]
