"""
Flamingo Finance (NEO N3) protocol
"""

from .adapter import Nep17Adapter

__all__ = ["Nep17Adapter"]
