"""
tapsmith — generate and maintain Homebrew tap formulas.
"""

__version__ = "0.1.0"
