"""
HTTP surface for the presentation core.
"""
