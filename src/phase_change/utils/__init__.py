"""
Helpers for file formats and external tool discovery.
"""
