"""
The VIEW layer: viewport transform and the Qt host widget.
"""
