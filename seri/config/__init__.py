"""
Configuration Management
=======================

Environment-based configuration using Pydantic Settings.

Components:
- settings: Compiler defaults and driver settings
- logging: Structured logging configuration
"""
