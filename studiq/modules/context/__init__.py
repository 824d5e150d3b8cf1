from .store import IMAGE_PLACEHOLDER, StudyContextStore

__all__ = ["IMAGE_PLACEHOLDER", "StudyContextStore"]
