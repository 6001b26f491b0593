"""Constants for GitHub content access."""

API_BASE_URL = "https://api.github.com"
API_VERSION = "2022-11-28"

# Smart HTTP endpoint that advertises every ref, HEAD first
GIT_BASE_URL = "https://github.com"

RAW_BASE_URL = "https://raw.githubusercontent.com"

# Identifies us to github.com when speaking the git smart HTTP protocol
GIT_USER_AGENT = "git/2.0 (github-press)"

# Files served untouched instead of being rendered as Markdown
IMAGE_EXTENSIONS: tuple[str, ...] = (".png", ".jpg", ".jpeg", ".gif", ".webp")

IMAGE_MEDIA_TYPES: dict[str, str] = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
}

# Owner and repository name shapes accepted by github.com
OWNER_NAME_PATTERN = r"^[-_a-zA-Z0-9]+$"
REPO_NAME_PATTERN = r"^[-_.a-zA-Z0-9]+$"


def is_image_path(path: str) -> bool:
    """Check if a repository path points at an image we pass through."""
    return path.lower().endswith(IMAGE_EXTENSIONS)
