from .redis_session_registry import RedisSessionRegistry

__all__ = ["RedisSessionRegistry"]
