"""
Customer file parsing, header resolution and row validation.
"""
