"""
Pointer input handling: turns raw pointer events into drag, pan, select and zoom.
"""
