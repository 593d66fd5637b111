"""
Compiler Core
=============

The Seri compiler pipeline: text -> tokens -> Schedule -> validated Schedule -> text.

Modules:
- dsl: lexer, tokens and recursive-descent parser
- passes: validation and transformation passes over a Schedule
- rendering: TikZ and HTML backends and template handling
- compiler: end-to-end facade used by the drivers
- errors: typed failures of every stage
"""
