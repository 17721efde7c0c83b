"""Author bio shown on the blog index and post pages."""

from dataclasses import dataclass
from html import escape
from typing import NotRequired, TypedDict


class AuthorBioDict(TypedDict):
    """Dictionary representation of an author bio."""

    name: str
    profile_url: NotRequired[str]
    role: NotRequired[str]
    employer: NotRequired[str]
    employer_url: NotRequired[str]
    tagline: NotRequired[str]
    location: NotRequired[str]
    picture: NotRequired[str]


@dataclass(frozen=True)
class AuthorBio:
    """Short introduction of the site author."""

    name: str
    profile_url: str | None = None
    role: str | None = None
    employer: str | None = None
    employer_url: str | None = None
    tagline: str | None = None
    location: str | None = None
    picture: str | None = None

    def to_dict(self) -> AuthorBioDict:
        """Convert to dictionary for JSON serialization, omitting unset fields."""
        result: AuthorBioDict = {"name": self.name}
        for key in (
            "profile_url",
            "role",
            "employer",
            "employer_url",
            "tagline",
            "location",
            "picture",
        ):
            value = getattr(self, key)
            if value is not None:
                result[key] = value  # type: ignore[literal-required]
        return result

    def to_html(self, class_name: str | None = None) -> str:
        """Render as an HTML fragment.

        Args:
            class_name: Extra CSS class appended to the container
        """
        classes = " ".join(name for name in ("Bio", class_name) if name)
        parts = [f'<div class="{escape(classes)}">']
        if self.picture is not None:
            parts.append(f'<img src="{escape(self.picture)}" alt="{escape(self.name)}"/>')

        intro = _link(self.name, self.profile_url)
        if self.role is not None:
            intro += f" is a {escape(self.role)}"
            if self.employer is not None:
                intro += f" at {_link(self.employer, self.employer_url)}"
            intro += "."

        lines = [intro]
        if self.tagline is not None:
            lines.append(escape(self.tagline))
        if self.location is not None:
            lines.append(
                f'<br/><span role="img" aria-label="pin-icon">📍</span>{escape(self.location)}'
            )
        parts.append(f"<p>{'<br/>'.join(lines)}</p>")
        parts.append("</div>")
        return "".join(parts)


def _link(text: str, href: str | None) -> str:
    if href is None:
        return escape(text)
    return f'<a href="{escape(href)}">{escape(text)}</a>'
