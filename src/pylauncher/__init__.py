"""
pylauncher: command-line launcher and interactive session for Python code.
"""

__version__ = "0.1.0"
