"""Line-oriented edits of the target's /etc files."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Sequence, Tuple

logger = logging.getLogger(__name__)

_HOOKS_RE = re.compile(r"^HOOKS=\(.*\)\s*$")


def target_path(root: str, rel: str) -> Path:
    return Path(root) / rel.lstrip("/")


def write_file(root: str, rel: str, contents: str, *, dry_run: bool) -> None:
    p = target_path(root, rel)
    if dry_run:
        logger.info("Would write %s", str(p))
        return
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(contents, encoding="utf-8")


def append_file(root: str, rel: str, contents: str, *, dry_run: bool) -> None:
    p = target_path(root, rel)
    if dry_run:
        logger.info("Would append to %s", str(p))
        return
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("a", encoding="utf-8") as fh:
        fh.write(contents)


def uncomment_locale(text: str, entry: str) -> Tuple[str, int]:
    """Uncomment ``#<entry>`` lines in locale.gen text.

    Only lines that are exactly the commented entry change. Returns the new
    text and the number of lines changed.
    """

    pattern = re.compile(r"^#" + re.escape(entry) + r"\s*$")
    out = []
    changed = 0
    for line in text.splitlines(keepends=True):
        body = line.rstrip("\r\n")
        if pattern.match(body):
            out.append(entry + line[len(body):])
            changed += 1
        else:
            out.append(line)
    return "".join(out), changed


def rewrite_hooks(text: str, hooks: Sequence[str]) -> Tuple[str, int]:
    """Replace the active ``HOOKS=(...)`` line of mkinitcpio.conf."""

    replacement = f"HOOKS=({' '.join(hooks)})"
    out = []
    changed = 0
    for line in text.splitlines(keepends=True):
        body = line.rstrip("\r\n")
        if _HOOKS_RE.match(body):
            out.append(replacement + line[len(body):])
            changed += 1
        else:
            out.append(line)
    return "".join(out), changed


def render_hosts(hostname: str) -> str:
    return "\n".join(
        [
            "127.0.0.1 localhost",
            "::1       localhost",
            f"127.0.1.1 {hostname}.localdomain {hostname}",
            "",
        ]
    )
