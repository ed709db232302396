"""
Authentication module for the front-desk portal.

This module provides authentication and authorization functionality including:
- Account registration for front-desk staff and clinicians
- Login and session token refresh
- Password change and token-based password reset
- Role-based access control
"""
