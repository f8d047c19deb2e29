"""Debug utility for nuch.

Provides a single debug() function that can be toggled via the NUCH_DEBUG
environment variable, for low-level tracing of filesystem and git steps that
would be noise in structured logs.

Usage:
    from nuch.utils.debug import debug

    debug(f"Copied {src} -> {dst}")

Environment:
    NUCH_DEBUG: Set to '1', 'true', 'yes' (case-insensitive) to enable
                debug output. Any other value or unset disables it.
"""

import os
import sys
from typing import Any

from nuch.core.constants import DEBUG_ENV_VAR

# Determine if debug mode is enabled at module import time
_DEBUG_ENABLED = os.environ.get(DEBUG_ENV_VAR, "").lower() in (
    "1",
    "true",
    "yes",
)


def debug(msg: Any) -> None:
    """Print debug message to stderr if NUCH_DEBUG is enabled.

    Args:
        msg: Message to print. Will be converted to string.

    Note:
        The environment variable is read at import time. Changing it later
        has no effect unless the module is reloaded.
    """
    if _DEBUG_ENABLED:
        print(f"[DEBUG] {msg}", file=sys.stderr)
