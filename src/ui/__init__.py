"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Chat message display with incremental reveal
    - Image attachment via browser upload (mobile browsers offer the camera)
    - Auto-scroll that follows new content until the user scrolls away
    - Copying messages to the clipboard

Session state and the submit flow live in session.py, free of view code.
"""
