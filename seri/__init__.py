"""
Seri Schedule Compiler
======================

Compiles the Seri schedule-description language into rendered timetables.

This package provides:
- Lexer and recursive-descent parser producing a Schedule IR
- A fixed chain of validation and transformation passes
- TikZ/LaTeX and HTML backend renderers with optional templates
- Command line, FastAPI and MCP drivers around the compiler core
"""

__version__ = "0.3.0"
__author__ = "Seri Developers"
