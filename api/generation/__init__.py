"""
Icon generation through the Anthropic Messages API (`/generate`).
"""
