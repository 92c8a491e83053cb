"""Desktop notification wrapper using notify-send."""

import logging

from tickle.core import runner
from tickle.core.errors import ControlPlaneUnavailable

logger = logging.getLogger(__name__)


def notify(
    title: str,
    message: str,
    urgency: str = "normal",
    timeout: int = 2000,
    app_name: str = "tickle",
) -> bool:
    """Send a desktop notification. Returns True if notify-send accepted it.

    Args:
        title: Notification title
        message: Notification body
        urgency: low, normal, or critical
        timeout: Display time in milliseconds
        app_name: Application name for notification
    """
    try:
        result = runner.run(
            "notify-send",
            "-t",
            str(timeout),
            "-u",
            urgency,
            "-a",
            app_name,
            title,
            message,
        )
    except ControlPlaneUnavailable as e:
        logger.info("notification skipped: %s", e)
        return False
    return result.returncode == 0
