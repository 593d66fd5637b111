"""
Rendering
=========

Backends that turn a validated Schedule into TikZ or HTML text.
"""
