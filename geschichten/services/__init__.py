"""
Services Package

Data access for accounts and learning content.
"""

from geschichten.services import accounts, content

__all__ = ['accounts', 'content']
