"""
Filtered-listing core.

Responsibilities:
- Describe the current filter selection and the locked subset (state).
- Round-trip filter state through the page query string (codec).
- Coalesce rapid edits into one settled value (debounce).
- Compute the visible, order-preserving subset of restaurants (engine).
- Turn visitor actions into lock-aware whole-dimension edits (editor).
"""
