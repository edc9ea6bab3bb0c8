"""
Configuration module for the volleyball lobby server.
"""

from .settings import LobbySettings

__all__ = ['LobbySettings']
