import pytest
import semver

from gurk.changelog import extract_section, get_version, main

CHANGELOG = """# Changelog

## 0.7.1

- fix a

## 0.7.0

- feature b
"""


def test_get_version_from_tag():
    assert str(get_version("refs/tags/v0.7.1")) == "0.7.1"


def test_get_version_not_a_tag():
    with pytest.raises(ValueError):
        get_version("refs/heads/master")


def test_get_version_missing_ref():
    with pytest.raises(ValueError):
        get_version(None)


def test_get_version_invalid_version():
    with pytest.raises(ValueError):
        get_version("refs/tags/vfoo")


def test_extract_middle_section():
    section = extract_section(CHANGELOG, semver.Version.parse("0.7.1"))
    assert section.strip() == "- fix a"


def test_extract_last_section():
    section = extract_section(CHANGELOG, semver.Version.parse("0.7.0"))
    assert section.strip() == "- feature b"


def test_extract_missing_section():
    with pytest.raises(ValueError):
        extract_section(CHANGELOG, semver.Version.parse("1.0.0"))


def test_extract_ignores_h3_headings():
    changelog = "## 0.2.0\n\n### Added\n\n- x\n\n## 0.1.0\n\n- y\n"
    section = extract_section(changelog, "0.2.0")
    assert "### Added" in section
    assert "- y" not in section


def test_main_writes_section(tmp_path, monkeypatch):
    (tmp_path / "CHANGELOG.md").write_text(CHANGELOG, encoding="utf-8")
    stale = tmp_path / "dist" / "stale.txt"
    stale.parent.mkdir()
    stale.write_text("old", encoding="utf-8")
    monkeypatch.setenv("GITHUB_REF", "refs/tags/v0.7.1")

    assert main(["--root", str(tmp_path)]) == 0
    written = (tmp_path / "dist" / "CHANGELOG.md").read_text(encoding="utf-8")
    assert written == "- fix a"
    assert not stale.exists()


def test_main_without_ref_fails(tmp_path, monkeypatch):
    (tmp_path / "CHANGELOG.md").write_text(CHANGELOG, encoding="utf-8")
    monkeypatch.delenv("GITHUB_REF", raising=False)

    assert main(["--root", str(tmp_path)]) == 1
    assert not (tmp_path / "dist" / "CHANGELOG.md").exists()