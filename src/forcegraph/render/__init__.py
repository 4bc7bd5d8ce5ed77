"""
Backend-agnostic rendering: the surface contract, the renderer and a
headless recording surface.
"""
