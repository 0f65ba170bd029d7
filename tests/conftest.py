"""Root test configuration: post-writing helpers and session-level cleanup"""

import shutil
from pathlib import Path

import pytest
import yaml


_PROJECT_ROOT = Path(__file__).parent.parent

_CLEANUP_FILES = ["mdblog.db", "test.db"]
_CLEANUP_DIRS = [".mdblog"]


@pytest.fixture(scope="session", autouse=True)
def cleanup_artifacts():
    """Remove DB files created during the test session."""
    yield
    for name in _CLEANUP_FILES:
        p = _PROJECT_ROOT / name
        if p.exists():
            p.unlink()
    for name in _CLEANUP_DIRS:
        p = _PROJECT_ROOT / name
        if p.exists():
            shutil.rmtree(p)


def render_post(body: str = "Body text.\n", **frontmatter) -> str:
    """Build raw post text: YAML front matter (if any) followed by body."""
    if not frontmatter:
        return body
    header = yaml.safe_dump(frontmatter, sort_keys=False, allow_unicode=True)
    return f"---\n{header}---\n\n{body}"


@pytest.fixture(name="render")
def render_fixture():
    """render(body, **frontmatter) -> raw post text."""
    return render_post


@pytest.fixture(name="content_dir")
def content_dir_fixture(tmp_path):
    d = tmp_path / "content" / "blog"
    d.mkdir(parents=True)
    return d


@pytest.fixture(name="write_post")
def write_post_fixture(content_dir):
    """Factory: write_post(slug, body=..., ext='.mdx', **frontmatter) -> Path."""
    def _write(slug: str, body: str = "Body text.\n", ext: str = ".mdx", **frontmatter) -> Path:
        path = content_dir / f"{slug}{ext}"
        path.write_text(render_post(body, **frontmatter), encoding="utf-8")
        return path
    return _write


@pytest.fixture(name="blog_dir")
def blog_dir_fixture(content_dir, write_post):
    """Four posts across two categories with overlapping tags."""
    write_post("lakehouse", "# Lakehouse\n\nLakes and houses.\n",
               title="Data Lakehouse Architecture", date="2025-04-18", author="Ada",
               category="Data Architecture", tags=["Lakehouse", "Architecture"], featured=True)
    write_post("agents", "# Agents\n\nAgents run pipelines.\n",
               title="AI Agents in Pipelines", date="2025-04-15", author="Ada",
               category="AI", tags=["AI", "Pipelines"])
    write_post("mesh", "# Mesh\n\nMesh lessons.\n",
               title="Data Mesh Lessons", date="2025-04-10", author="Ada",
               category="Data Architecture", tags=["architecture", "Case Study"])
    write_post("dbt", "# dbt\n\nTransformations.\n",
               title="Advanced dbt", date="April 5, 2025", author="Ada",
               category="Data Engineering", tags=["SQL"])
    return content_dir
