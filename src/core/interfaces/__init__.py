"""Core interfaces/abstractions.

Why:
- Defines contracts (Protocol) that concrete adapters implement.
- Inverts dependencies: the core depends on abstractions.
"""

from core.interfaces.platform import ChangelogSource, PlatformAPI, PromotionUI

__all__ = ["ChangelogSource", "PlatformAPI", "PromotionUI"]
