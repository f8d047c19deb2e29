"""Core constants for nuch.

This module defines constants used throughout the application:
- Image and content file extensions
- Commit message templates
- Environment variables and config defaults
"""

# ============================================================================
# File Extensions
# ============================================================================

#: Media extensions grouped with a content file by stem
IMAGE_EXTENSIONS: tuple[str, ...] = (
    ".png",
    ".jpg",
    ".jpeg",
    ".gif",
    ".webp",
    ".svg",
)

#: Extensions Nuxt Content can render from a collection directory
CONTENT_EXTENSIONS: tuple[str, ...] = (
    ".md",
    ".yaml",
    ".yml",
    ".json",
    ".csv",
)

# ============================================================================
# Version Control
# ============================================================================

#: Final path segment marking the content root of a site checkout
CONTENT_DIR_NAME = "content"

#: Commit message used when a file is published into a collection
PUBLISH_COMMIT_TEMPLATE = "Add {filename} to blog"

#: Commit message used when a file is removed from a collection
DELETE_COMMIT_TEMPLATE = "Remove {filename} from blog"

#: Seconds allowed for any single git invocation (push included)
GIT_TIMEOUT_SECONDS = 120

# ============================================================================
# Backups
# ============================================================================

#: Prefix of the per-invocation temp directory holding delete backups
BACKUP_DIR_PREFIX = "nuch-delete-"

# ============================================================================
# Configuration
# ============================================================================

#: Overrides the config file location when set
CONFIG_ENV_VAR = "NUCH_CONFIG"

#: Enables debug() output when set to 1/true/yes
DEBUG_ENV_VAR = "NUCH_DEBUG"

#: Application directory name under the XDG config home
CONFIG_APP_DIR = "nuch"

#: Config file name inside the application directory
CONFIG_FILE_NAME = "config.toml"
