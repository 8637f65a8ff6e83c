"""
Centralized exchange integrations.
"""
