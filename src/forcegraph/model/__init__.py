"""
The MODEL layer contains pure data structures.
It has NO knowledge of the GUI (Qt), the physics or the drawing backend.
"""
