from usageowners.patterns import MatchMode, compile_pattern


def test_substring_match_is_unanchored():
    p = compile_pattern("a.js")
    assert p.matches("src/a.js")
    assert p.matches("src/a.jsx")
    assert not p.matches("src/abjs")


def test_directory_pattern_matches_inside_path():
    p = compile_pattern("design-system/")
    assert p.matches("src/design-system/Button.jsx")
    assert not p.matches("src/design-system.jsx")


def test_double_star_crosses_dirs():
    p = compile_pattern("docs/**.md")
    assert p.matches("docs/a.md")
    assert p.matches("docs/a/b.md")


def test_single_star_stays_in_segment():
    p = compile_pattern("docs/*.md")
    assert p.matches("docs/a.md")
    assert not p.matches("docs/a/b.md")


def test_question_mark_is_one_non_separator_char():
    p = compile_pattern("v?/x")
    assert p.matches("v1/x")
    assert not p.matches("v/x")
    assert not p.matches("v//x")


def test_regex_metacharacters_are_literal():
    p = compile_pattern("src/(legacy)+[a]")
    assert p.matches("src/(legacy)+[a]/file.js")
    assert not p.matches("src/legacya/file.js")


def test_anchored_basename_glob_matches_anywhere():
    p = compile_pattern("*.md", MatchMode.ANCHORED)
    assert p.matches("README.md")
    assert p.matches("docs/README.md")
    assert not p.matches("docs/README.mdx")


def test_anchored_directory_shorthand():
    p = compile_pattern("docs/", MatchMode.ANCHORED)
    assert p.matches("docs/a.md")
    assert p.matches("docs/a/b.md")
    assert not p.matches("x/docs/a.md")


def test_anchored_slash_patterns_anchor_to_root():
    p = compile_pattern("docs/*", MatchMode.ANCHORED)
    assert p.matches("docs/a.md")
    assert not p.matches("docs/a/b.md")
    assert not p.matches("x/docs/a.md")
