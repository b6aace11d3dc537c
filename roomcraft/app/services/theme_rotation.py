"""
Scheduled theme rotation.

The host calls ``rotate_theme_if_expired`` on a timer. Themes cycle
through a fixed list; each rotated theme lasts the manager's configured
duration.
"""

import logging
import re

from roomcraft.app.schemas.theme import Theme
from roomcraft.app.services.theme_manager import ThemeManager

logger = logging.getLogger(__name__)

THEME_ROTATION = [
    ("School", "Design a classroom or study space"),
    ("Office", "Create a professional workspace"),
    ("Bedroom", "Design a cozy sleeping area"),
    ("Kitchen", "Build a functional cooking space"),
    ("Living Room", "Create a comfortable gathering space"),
    ("Library", "Design a quiet reading room"),
]


def generate_next_theme(current: Theme, start_time: int, duration_ms: int) -> Theme:
    """Build the theme that follows ``current`` in the rotation.

    A theme name outside the rotation restarts the cycle at the beginning.
    """
    names = [name for name, _ in THEME_ROTATION]
    current_index = names.index(current.name) if current.name in names else -1
    name, description = THEME_ROTATION[(current_index + 1) % len(THEME_ROTATION)]

    slug = re.sub(r"\s+", "_", name.lower())
    return Theme(
        id=f"theme_{slug}_{start_time}",
        name=name,
        description=description,
        start_time=start_time,
        end_time=start_time + duration_ms,
        active=False,
    )


async def rotate_theme_if_expired(theme_manager: ThemeManager) -> tuple[bool, Theme]:
    """
    Run one rotation check.

    Returns:
        ``(rotated, current_theme)``; ``rotated`` is True only when a new
        theme replaced an expired one
    """
    current = await theme_manager.get_current_theme()
    if current is None:
        logger.info("[ROTATION] No current theme, initializing default")
        return False, await theme_manager.initialize_default_theme()

    if theme_manager.get_time_remaining(current) > 0:
        logger.debug(f"[ROTATION] Theme {current.name} is still active")
        return False, current

    next_theme = generate_next_theme(
        current,
        start_time=theme_manager.now(),
        duration_ms=theme_manager.theme_duration_ms,
    )
    activated = await theme_manager.schedule_next_theme(next_theme)
    logger.info(f"[ROTATION] Rotated {current.name} -> {activated.name}")
    return True, activated
