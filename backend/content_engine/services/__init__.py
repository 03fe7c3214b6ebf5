"""Services Layer — one handler module per endpoint family.

Invariants:
    - Each handler is linear: build prompt → call upstream → normalise → return dict
    - Handlers receive their clients by constructor injection (never build them)

Design Decisions:
    - Prompt text kept in dedicated modules (prompt_recipes, style_guides) next to handlers
"""
