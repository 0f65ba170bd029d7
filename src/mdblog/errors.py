"""Error types shared across the store, repository, and contact layers"""


class MdBlogError(Exception):
    """Base error for mdblog."""


class PostNotFound(MdBlogError):
    """No backing document exists for the requested slug."""

    def __init__(self, slug: str):
        super().__init__(f"Post not found: {slug}")
        self.slug = slug


class PostParseError(MdBlogError):
    """A document exists but its front matter or fields could not be parsed."""

    def __init__(self, slug: str, cause: Exception):
        super().__init__(f"Failed to parse post {slug}: {cause}")
        self.slug = slug
        self.cause = cause


class ContactError(MdBlogError):
    """A contact submission was rejected; message is safe to show to the sender."""

    def __init__(self, message: str, status: int = 400):
        super().__init__(message)
        self.message = message
        self.status = status
