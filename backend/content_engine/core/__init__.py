"""Core Layer — pure rules, no IO, no async, no HTTP.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - All functions are pure and deterministic

Design Decisions:
    - Prompt assembly and upstream calls live in services/; core/ only shapes text and data
"""
