"""모델 패키지 — 모든 ORM 모델을 메타데이터에 등록.

Model package — Importing this package registers every ORM model with Base.metadata.
"""

from suggestion_box.models.suggestion import Suggestion

__all__ = ["Suggestion"]
