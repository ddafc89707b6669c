"""Markdown post writer for the static site."""

import os
import re
import tempfile
from datetime import date
from pathlib import Path

import yaml

from ai_mews.core import DigestDocument, Item, PostPublisher

FRONT_MATTER_DELIMITER = "---"

# Delimiters must sit on their own line; values may contain "---".
FRONT_MATTER_PATTERN = re.compile(r"\A---\r?\n(.*?)^---[ \t]*$", re.DOTALL | re.MULTILINE)


class MarkdownPostPublisher(PostPublisher):
    """Write one dated Markdown post with YAML front matter per day."""

    def __init__(self, posts_dir: Path, layout: str = "post.njk") -> None:
        self.posts_dir = posts_dir
        self.layout = layout

    def path_for(self, date_key: date) -> Path:
        return self.posts_dir / f"{date_key.isoformat()}.md"

    def exists(self, date_key: date) -> bool:
        """Check if a post for the date was already written."""
        return self.path_for(date_key).exists()

    def publish(self, document: DigestDocument, overwrite: bool = False) -> Path:
        """Write the post atomically and return its path."""
        path = self.path_for(document.date_key)
        if path.exists() and not overwrite:
            raise FileExistsError(f"Post already exists: {path}")

        path.parent.mkdir(parents=True, exist_ok=True)
        content = self.render(document)

        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        print(f"✓ Post written: {path}")
        return path

    def render(self, document: DigestDocument) -> str:
        """Render front matter followed by a Markdown body."""
        front_matter = {
            "layout": self.layout,
            "date": document.date_key.isoformat(),
            "title": document.title,
            "dek": document.dek,
            "items": [item.to_front_matter() for item in document.items],
        }
        header = yaml.safe_dump(
            front_matter, allow_unicode=True, default_flow_style=False, sort_keys=False, width=1000
        )

        lines = [FRONT_MATTER_DELIMITER, header.rstrip("\n"), FRONT_MATTER_DELIMITER, ""]
        for item in document.items:
            lines.extend(self._format_item(item))
        return "\n".join(lines)

    def _format_item(self, item: Item) -> list[str]:
        lines = [
            f"## [{item.title}]({item.source_url})",
            "",
            f"*{item.dek}*",
            "",
        ]
        for bullet in item.bullets:
            lines.append(f"- {bullet}")
        lines.extend(["", item.take, ""])
        return lines

    def load(self, date_key: date) -> DigestDocument:
        """Parse a written post back into a document."""
        return self.parse(self.path_for(date_key).read_text(encoding="utf-8"))

    def parse(self, content: str) -> DigestDocument:
        match = FRONT_MATTER_PATTERN.match(content)
        if not match:
            raise ValueError("Post has no front matter block")

        data = yaml.safe_load(match.group(1)) or {}
        raw_date = data.get("date")
        date_key = raw_date if isinstance(raw_date, date) else date.fromisoformat(str(raw_date))

        return DigestDocument(
            date_key=date_key,
            items=[Item.from_front_matter(entry) for entry in data.get("items") or []],
            title=data.get("title", ""),
            dek=data.get("dek", ""),
        )
