"""
Listing pages.

Responsibilities:
- Build page contexts (all restaurants, one cuisine, one neighborhood).
- Drive a live listing through the debounced controller state machine.
- Render listings into API responses and cache server renders.
"""
