"""Account profile use cases."""

from .get_profile import GetProfileUseCase
from .update_avatar import UpdateAvatarUseCase

__all__ = ["GetProfileUseCase", "UpdateAvatarUseCase"]
