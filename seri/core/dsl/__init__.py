"""
DSL Processing Module
====================

Seri source text to Schedule IR.

Components:
- tokens: token kinds and the Token value
- lexer: lazy tokenizer with line/column tracking
- parser: recursive-descent parser producing a Schedule
"""
