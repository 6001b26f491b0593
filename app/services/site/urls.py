"""Links generated for a rendered site."""

import posixpath
from dataclasses import dataclass
from urllib.parse import quote


@dataclass(frozen=True)
class SiteURLBuilder:
    """
    Builds every link a page emits, relative to where the site is mounted.

    A site served at the root ("proxied") links to "/2020/post"; the same site
    served under "/github-site/<owner>/<repo>/" ("direct") must keep that
    prefix on every link so navigation stays inside the namespace.
    """

    base_path: str = "/"

    @classmethod
    def direct(cls, owner: str, repo: str) -> "SiteURLBuilder":
        return cls(f"/github-site/{owner}/{repo}/")

    @classmethod
    def proxied(cls) -> "SiteURLBuilder":
        return cls("/")

    def build_path(self, suffix: str) -> str:
        base = self.base_path if self.base_path.endswith("/") else f"{self.base_path}/"
        suffix = suffix.lstrip("/")
        if not suffix:
            return base
        return posixpath.normpath(base + quote(suffix, safe="/-_.~"))

    def home(self) -> str:
        return self.build_path("")

    def article(self, slug: str) -> str:
        return self.build_path(slug)
