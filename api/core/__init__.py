"""
Shared, cross-cutting code for the API.

`core/` holds small building blocks that the feature packages use
(settings, error types, DB wiring, the Anthropic HTTP client). Keep
icon-specific SQL and business logic in `icons/` and `generation/`.
"""
