"""
Data Models
===========

Pydantic data models for the compiler IR and driver payloads.

Models:
- schedule: Schedule, Day, Session, Speaker, TimeOfDay intermediate representation
- schemas: diagnostics, compilation results and API request/response schemas
"""
