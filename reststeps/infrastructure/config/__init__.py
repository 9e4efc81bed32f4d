from reststeps.infrastructure.config.settings import Settings

__all__ = ["Settings"]
