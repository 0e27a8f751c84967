from .scheduling_service import ResourceSchedulingService

__all__ = ["ResourceSchedulingService"]
