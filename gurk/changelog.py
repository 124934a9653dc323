"""Extract the changelog section of a tagged release into the dist directory."""

from __future__ import annotations

import argparse
import os
import shutil
import sys
from collections.abc import Sequence
from itertools import accumulate
from pathlib import Path

import semver
from markdown_it import MarkdownIt

_TAG_PREFIX = "refs/tags/v"


def get_version(github_ref: str | None) -> semver.Version:
    """The release version from a tag ref such as refs/tags/v1.2.3."""
    if github_ref is None:
        raise ValueError("missing GITHUB_REF; not running in GitHub actions?")
    if not github_ref.startswith(_TAG_PREFIX):
        raise ValueError(
            f"failed to extract version from '{github_ref}'; not running for a tag?"
        )
    return semver.Version.parse(github_ref[len(_TAG_PREFIX) :])


def _h2_ranges(changelog: str) -> list[tuple[int, int]]:
    lines = changelog.splitlines(keepends=True)
    offsets = [0, *accumulate(len(line) for line in lines)]
    ranges = []
    for token in MarkdownIt("commonmark").parse(changelog):
        if token.type == "heading_open" and token.tag == "h2" and token.map:
            first, last = token.map
            ranges.append((offsets[first], offsets[min(last, len(lines))]))
    return ranges


def extract_section(changelog: str, version: semver.Version | str) -> str:
    """The text between the level-2 heading naming version and the next one."""
    version_str = str(version)
    ranges = _h2_ranges(changelog)
    for idx, (start, end) in enumerate(ranges):
        if version_str in changelog[start:end]:
            if idx + 1 < len(ranges):
                return changelog[end : ranges[idx + 1][0]]
            return changelog[end:]
    raise ValueError(
        f"no h2 entry in CHANGELOG for version '{version_str}'; "
        "changelog section missing?"
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Write the changelog section of the current release to dist/CHANGELOG.md."""
    parser = argparse.ArgumentParser(description="Generate CHANGELOG.md in dist")
    parser.add_argument(
        "--root", type=Path, default=Path.cwd(), help="project root directory"
    )
    args = parser.parse_args(argv)

    root: Path = args.root
    dist = root / "dist"
    try:
        if dist.exists():
            shutil.rmtree(dist)
        dist.mkdir(parents=True)

        version = get_version(os.environ.get("GITHUB_REF"))
        changelog = (root / "CHANGELOG.md").read_text(encoding="utf-8")
        section = extract_section(changelog, version)
        (dist / "CHANGELOG.md").write_text(section.strip(), encoding="utf-8")
    except (OSError, ValueError) as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    return 0