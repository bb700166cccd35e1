from .link import ShortLink

__all__ = ["ShortLink"]
