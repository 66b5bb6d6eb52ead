"""
Bundlesmith: behavior code synthesis and game export assembly.

This toolchain generates runtime JavaScript for events-based behaviors and
assembles complete, deployable bundles of a game project for the web preview,
HTML5, mobile, desktop and social-platform wrappers.
"""

__version__ = "1.0.0"
__author__ = "Bundlesmith Team"
