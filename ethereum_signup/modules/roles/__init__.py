"""
Roles Module
============

Site roles offered to the signup settings form.
"""

from .database import RoleProvider, ANONYMOUS_ROLE, AUTHENTICATED_ROLE, ADMINISTRATOR_ROLE

__all__ = ['RoleProvider', 'ANONYMOUS_ROLE', 'AUTHENTICATED_ROLE', 'ADMINISTRATOR_ROLE']
