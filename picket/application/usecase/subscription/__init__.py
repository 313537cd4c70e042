"""Push subscription use cases."""

from .notify import NotifyUseCase
from .subscribe import SubscribeUseCase, UnsubscribeUseCase

__all__ = ["NotifyUseCase", "SubscribeUseCase", "UnsubscribeUseCase"]
