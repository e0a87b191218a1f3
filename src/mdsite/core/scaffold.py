"""Skeleton of a new site: config, two pages and one author"""

import logging
from pathlib import Path

from mdsite.config import AUTHORS_DIR, PAGES_DIR, SITE_CONFIG_FILE
from mdsite.errors import SiteError


logger = logging.getLogger(__name__)

GITIGNORE = """\
_site/
"""

CONFIG_YAML = """\
url: https://example.com
repo: https://github.com/example/site
branch: main
link_to_source: true
site_name: My new site
footer: Built with mdsite
tags:
  title: Tags
  description: All the tags
archive:
  title: Archive
  description: All the pages
navbar:
  start:
    - path: about
      title: About
  end:
    - path: archive
      title: Archive
from:
  name: Foo Bar
  email: foobar@example.com
authors:
  - name: Foo Bar
    nickname: foobar
atom:
  max: 20
"""

INDEX_MD = """\
---
title: Welcome
timestamp: 2023-10-11T12:30:01
description: The front page of the new site
tags:
  - blog
author: foobar
---

Welcome to the new site.

{% latest limit=10 %}
"""

ABOUT_MD = """\
---
title: About
timestamp: 2023-10-11T12:30:02
description: About this site
tags:
  - about
author: foobar
---

This site was generated from Markdown files. Go back to the [front page](/).
"""

FOOBAR_MD = """\
Foo Bar writes this site.
"""

SKELETON = {
    ".gitignore": GITIGNORE,
    SITE_CONFIG_FILE: CONFIG_YAML,
    f"{PAGES_DIR}/index.md": INDEX_MD,
    f"{PAGES_DIR}/about.md": ABOUT_MD,
    f"{AUTHORS_DIR}/foobar.md": FOOBAR_MD,
}


def new_site(root: str | Path) -> list[Path]:
    """Create a buildable site skeleton under root, which must not exist yet."""
    root = Path(root)
    if root.exists():
        raise SiteError(f"Path '{root}' exists")
    logger.info("Creating new site in '%s'", root)

    written: list[Path] = []
    for name, text in SKELETON.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        written.append(path)
    return written
