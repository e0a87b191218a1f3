"""Root test configuration: a small on-disk site shared by unit and integration tests"""

from pathlib import Path

import pytest


CONFIG_YAML = """\
url: https://example.com
repo: https://github.com/example/site
branch: main
site_name: Example
footer: Example footer
tags:
  title: Tags
  description: All the tags
archive:
  title: Archive
  description: Every page
navbar:
  start:
    - path: about
      title: About
from:
  name: Foo Bar
  email: foobar@example.com
authors:
  - name: Foo Bar
    nickname: foobar
"""

INDEX_MD = """\
---
title: Home
timestamp: 2024-01-01T10:00:00
description: Front page
tags:
  - blog
---

Welcome.

{% latest limit=5 %}
"""

ABOUT_MD = """\
---
title: About
timestamp: 2024-01-02T10:00:00
tags:
  - about
author: foobar
---

Read the [home page](/) or the [rust page](/rust).
"""

RUST_MD = """\
---
title: Rust
timestamp: 2024-01-03T10:00:00
tags:
  - Rust
  - blog
---

{% include file="examples/hello_world.rs" %}
"""

HELLO_RS = 'fn main() {\n    println!("Hello, world!");\n}'


def write_page(root: Path, name: str, text: str) -> Path:
    path = root / "pages" / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture(name="site_root")
def site_root_fixture(tmp_path) -> Path:
    """A buildable site: three pages, one author, one include target."""
    root = tmp_path / "site"
    root.mkdir()
    (root / "config.yaml").write_text(CONFIG_YAML)
    (root / "authors").mkdir()
    (root / "authors" / "foobar.md").write_text("Foo writes **things**.\n")
    (root / "examples").mkdir()
    (root / "examples" / "hello_world.rs").write_text(HELLO_RS)
    write_page(root, "index.md", INDEX_MD)
    write_page(root, "about.md", ABOUT_MD)
    write_page(root, "rust.md", RUST_MD)
    return root


@pytest.fixture(name="add_page")
def add_page_fixture(site_root):
    """Write an extra page into the site_root pages directory."""
    return lambda name, text: write_page(site_root, name, text)
