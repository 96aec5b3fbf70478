"""API routes package"""

from . import health, logs, nutrition, meals, estimates, realtime

__all__ = ["health", "logs", "nutrition", "meals", "estimates", "realtime"]
