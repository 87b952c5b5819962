"""Deep links from a finding's location into a browsable repository.

The repository base is free-form user input, e.g.
``https://gitlab.com/group/project/-/blob/main/``. Tree views are
rewritten to blob views so the link opens the file itself. Anything that
cannot be resolved yields ``""`` and the caller shows a disabled link.
"""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import quote, urljoin, urlsplit, urlunsplit

from sastview.report.models import Location

# Characters left as-is when encoding a file path (RFC 3986 pchar + "/")
_PATH_SAFE = "/!$&'()*+,;=:@-._~%"

_SCHEMES = ("http", "https", "file")

# The view segment follows "/-/" on GitLab and "/<owner>/<repo>/" on GitHub
_GITLAB_TREE_RE = re.compile(r"^(.*?/-/)tree/")
_GITHUB_TREE_RE = re.compile(r"^(/[^/]+/[^/]+)/tree/")


def normalize_repo_url(base: str) -> Optional[str]:
    """Return *base* as a directory-style file-view URL, or None if malformed."""
    if not base or not base.strip():
        return None
    try:
        parts = urlsplit(base.strip())
    except ValueError:
        return None
    if parts.scheme not in _SCHEMES or not (parts.netloc or parts.scheme == "file"):
        return None

    path = parts.path
    if not path.endswith("/"):
        path += "/"
    if "/-/" in path:
        path = _GITLAB_TREE_RE.sub(r"\1blob/", path, count=1)
    else:
        path = _GITHUB_TREE_RE.sub(r"\1/blob/", path, count=1)

    return urlunsplit((parts.scheme, parts.netloc, path, parts.query, ""))


def line_fragment(location: Location) -> str:
    """``L10`` or ``L10-15``; empty when the start line is unknown."""
    if location.start_line is None:
        return ""
    return f"L{location.line_range}"


def resolve_source_link(base: str, location: Location) -> str:
    """Build the deep link for *location* under *base*. Returns "" on failure."""
    if not location.file:
        return ""
    normalized = normalize_repo_url(base)
    if normalized is None:
        return ""
    try:
        url = urljoin(normalized, quote(location.file, safe=_PATH_SAFE))
    except ValueError:
        return ""

    fragment = line_fragment(location)
    return f"{url}#{fragment}" if fragment else url


def source_label(location: Location) -> str:
    """Link text, e.g. ``src/app.py:10-15``."""
    if location.start_line is None:
        return location.file
    return f"{location.file}:{location.line_range}"
