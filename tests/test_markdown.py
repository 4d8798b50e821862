from usageowners.aggregate import AggregationDiagnostics, SkippedInstance
from usageowners.markdown import render_owners_markdown, render_usage_markdown


def test_usage_markdown_orders_components_by_total():
    md = render_usage_markdown({"Card": {"@a": 1}, "Button": {"@a": 2, "@b": 3}})
    assert md.index("**Button**") < md.index("**Card**")
    assert "  - `@b`: 3" in md


def test_usage_markdown_lists_diagnostics():
    diag = AggregationDiagnostics(
        skipped=[SkippedInstance(component="Card", position=0, reason="missing file path")],
        unattributed={"Card": ["b.js", "a.js", "b.js"]},
    )
    md = render_usage_markdown({"Card": {}}, diagnostics=diag, max_unattributed=1)
    assert "### Unattributed files (2)" in md
    assert "- `a.js`" in md
    assert "…and 1 more" in md
    assert "1 instance without a file location skipped." in md


def test_empty_tables():
    assert "_No components in report._" in render_usage_markdown({})
    assert "_No owners defined._" in render_owners_markdown({})
