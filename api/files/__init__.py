"""
Files module - uploaded course content.

This module stores uploaded files on local disk under generated storage keys
and keeps a metadata record for each one in the relational store.
"""
