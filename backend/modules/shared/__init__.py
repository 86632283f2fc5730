"""
Cosmic Garden - Shared Module
Shared utilities and database connections
"""

from .database import get_database, init_database_system
from .api_response import APIResponse, success_response, error_response

__all__ = ['get_database', 'init_database_system', 'APIResponse', 'success_response', 'error_response']
