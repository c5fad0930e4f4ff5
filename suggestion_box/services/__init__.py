"""서비스 패키지 — 비즈니스 로직 계층.

Service package — Business logic layer.
Services receive a SuggestionBackend from the API layer and never pick a
backend themselves.
"""
