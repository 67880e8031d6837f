"""
Storyblok Manager - Management API client and CLI for Storyblok spaces.

Provides components, stories and asset management against the
Storyblok Management API.
"""

__version__ = "1.0.0"
__prog_name__ = "sbm"
__author__ = "Storyblok Manager Contributors"
