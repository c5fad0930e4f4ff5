"""레포지토리 패키지 — 제안 저장소 계층.

Repository package — Suggestion persistence layer.
Contains the backend contract plus its two implementations: the SQLAlchemy
repository (document collection) and the JSON key-value repository (local storage).
"""
