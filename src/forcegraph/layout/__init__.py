"""
The LAYOUT layer moves nodes. It reads and writes the model arena only.
"""
