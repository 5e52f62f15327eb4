"""
CLI commands for podcomplete.
"""
