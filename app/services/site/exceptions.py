"""Exceptions for the site rendering pipeline."""


class RevisionNotFound(Exception):
    """Repository has no HEAD to render from.

    Raised when the ref advertisement has no HEAD entry, or when the
    repository itself does not exist. Terminates the request with a 404.
    """

    status_code = 404

    def __init__(self, owner: str, repo: str):
        self.owner = owner
        self.repo = repo
        self.message = "GitHub Repo does not have HEAD branch."
        super().__init__(f"{owner}/{repo}: {self.message}")
