"""
gitwiser: Git Repository Health Check

Finds duplicate author identities in a repository's history and
generates the .mailmap that folds them back together.
"""

__version__ = "1.0.0"
