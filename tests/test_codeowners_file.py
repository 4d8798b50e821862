from pathlib import Path

import pytest

from usageowners.codeowners_file import load_codeowners, parse_codeowners_text
from usageowners.errors import ManifestUnavailable


def test_parse_skips_blank_comment_and_ownerless_lines():
    m = parse_codeowners_text(
        """
        # design system
        design-system/ @acme/ds

        docs/
        src/components/   @acme/app   @alice
        """
    )
    assert [(r.pattern, r.owners) for r in m.rules] == [
        ("design-system/", ("@acme/ds",)),
        ("src/components/", ("@acme/app", "@alice")),
    ]
    assert m.skipped_lines == [5]


def test_parse_strips_all_leading_slashes():
    m = parse_codeowners_text("//src/app/ @team\n/lib @other\n")
    assert [r.pattern for r in m.rules] == ["src/app/", "lib"]


def test_later_identical_pattern_replaces_owners():
    m = parse_codeowners_text("src/ @a\nlib/ @c\n/src/ @b\n")
    assert [(r.pattern, r.owners, r.line) for r in m.rules] == [
        ("src/", ("@b",), 3),
        ("lib/", ("@c",), 2),
    ]
    assert [r.owners for r in m.overridden] == [("@a",)]


def test_empty_manifest_is_valid():
    assert len(parse_codeowners_text("")) == 0
    assert len(parse_codeowners_text("# only comments\n\n")) == 0


def test_load_missing_file_raises(tmp_path: Path):
    with pytest.raises(ManifestUnavailable):
        load_codeowners(tmp_path / "CODEOWNERS")


def test_load_records_source(tmp_path: Path):
    p = tmp_path / "CODEOWNERS"
    p.write_text("src/ @team\n", encoding="utf-8")
    m = load_codeowners(p)
    assert m.source == str(p)
    assert m.rules[0].source == str(p)
