"""
Core configuration and exceptions for the O*NET document pipeline.
"""
