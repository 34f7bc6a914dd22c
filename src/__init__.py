"""
StoryWeaver - interactive story co-authoring and inspiration kits.
"""

__version__ = "0.3.0"
