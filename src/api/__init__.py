"""
StoryWeaver HTTP API.
"""
