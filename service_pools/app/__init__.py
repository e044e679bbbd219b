"""
Pool cache service application package.
"""
