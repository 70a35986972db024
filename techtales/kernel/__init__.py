"""
Kernel: persistence models, identity and notifications.
"""
