"""
Ethereum Signup Modules
=======================

Flask blueprint modules and the stores they share.
"""

__all__ = ['settings', 'roles', 'signup_admin']
