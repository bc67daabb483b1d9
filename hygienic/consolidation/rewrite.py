"""Line-based rewrite of qualifying imports into one barrel import.

The rewrite never re-prints the syntax tree. Lines that are not part of a
qualifying declaration come out byte-identical, including comments and
whitespace. A declaration is assumed not to share a physical line with
unrelated code.
"""

from collections.abc import Sequence

from ..analysis.import_scanner import ImportMatch
from .types import RewriteOutcome


def render_consolidated_import(names: Sequence[str], barrel_root: str) -> str:
    return f"import {{ {', '.join(names)} }} from '{barrel_root}';"


def merge_names(matches: Sequence[ImportMatch], sort_names: bool) -> list[str]:
    """Union of all match names; first-seen order unless sorting."""
    merged: dict[str, None] = {}
    for match in matches:
        for name in match.names:
            merged.setdefault(name, None)
    names = list(merged)
    return sorted(names) if sort_names else names


def rewrite(
    matches: Sequence[ImportMatch],
    original_content: str,
    sort_names: bool,
    barrel_root: str,
) -> RewriteOutcome:
    """Replace all qualifying import lines with one consolidated import.

    The consolidated statement takes the place of the first target line;
    the remaining target lines are dropped.
    """
    if not matches:
        return RewriteOutcome(new_content=original_content)

    consolidated_import = render_consolidated_import(
        merge_names(matches, sort_names), barrel_root
    )
    target_lines = {line for match in matches for line in match.line_numbers}

    new_lines: list[str] = []
    consolidated_added = False
    for line_number, line in enumerate(original_content.split("\n"), start=1):
        if line_number not in target_lines:
            new_lines.append(line)
        elif not consolidated_added:
            # keep a byte order mark and CRLF endings intact
            prefix = "\ufeff" if line.startswith("\ufeff") else ""
            suffix = "\r" if line.endswith("\r") else ""
            new_lines.append(prefix + consolidated_import + suffix)
            consolidated_added = True

    new_content = "\n".join(new_lines)
    return RewriteOutcome(
        new_content=new_content,
        changed=new_content != original_content,
        consolidated_import=consolidated_import,
        original_imports=[match.render() for match in matches],
    )
