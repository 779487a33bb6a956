"""
Command Line Interface.
"""
