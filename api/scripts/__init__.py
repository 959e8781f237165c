"""
Offline operator tools.
"""
