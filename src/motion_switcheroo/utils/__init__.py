"""
Utility Package.

Shared console/logging helpers used by the pipeline and the CLI.
"""
