"""
Tests for post-processing of generated pages.
"""

import pytest

from cmddocs.config import DocsConfig
from cmddocs.docs.collector import collect_details
from cmddocs.docs.postprocess import (
    PostProcessor,
    normalize_see_also,
    options_summary,
    outdent_headings,
    splice_section,
)
from cmddocs.exceptions import ConsistencyError, FlagGroupError, MarkerNotFoundError

POINTER = "See the [global flags page](/flags/) for global options not listed here.\n\n"

CHILD_DOC = (
    "## app sub\n\n"
    "Sub command\n\n"
    "### Options inherited from parent commands\n\n"
    "```\n  --dry-run\n```\n\n"
    "### SEE ALSO\n\n"
    "* [app](/commands/app/)\t - Application root\n\n"
)


@pytest.fixture
def processor(sample_tree, lg):
    return PostProcessor(
        collect_details(sample_tree), "app.md", sample_tree.flag_groups, DocsConfig(), lg
    )


@pytest.mark.unit
class TestSpliceSection:
    """Test splice_section."""

    def test_replaces_between_markers(self):
        """Test the text from start up to end is replaced, the rest kept."""
        doc = "head\nSTART\nmiddle\nEND\ntail\n"
        assert splice_section(doc, "START", "END", "new\n") == "head\nnew\nEND\ntail\n"

    def test_end_heading(self):
        """Test the end marker can be rewritten."""
        doc = "a START b END c"
        assert splice_section(doc, "START", "END", "X ", "Fin") == "a X Fin c"

    @pytest.mark.parametrize(
        "doc,start,end",
        [("no markers", -1, -1), ("only START", 5, -1), ("END then START", 9, 0)],
    )
    def test_missing_or_misordered(self, doc, start, end):
        """Test missing or out of order markers raise with both offsets."""
        with pytest.raises(MarkerNotFoundError) as exc_info:
            splice_section(doc, "START", "END", "")
        assert (exc_info.value.start_cut, exc_info.value.end_cut) == (start, end)


@pytest.mark.unit
class TestTextTransforms:
    """Test see also normalization and heading outdent."""

    def test_normalize_see_also(self):
        assert normalize_see_also("x\n### SEE ALSO\n### SEE ALSO\n") == (
            "x\n### See Also\n### SEE ALSO\n"
        )

    def test_normalize_see_also_absent(self):
        assert normalize_see_also("nothing here\n") == "nothing here\n"

    @pytest.mark.parametrize(
        "line,expected",
        [
            ("## Title", "# Title"),
            ("# Title", "# Title"),
            ("#### Title", "### Title"),
            ("###### Auto", "##### Auto"),
            ("plain text", "plain text"),
            ("a ## not a heading", "a ## not a heading"),
        ],
    )
    def test_outdent(self, line, expected):
        assert outdent_headings(line) == expected

    def test_outdent_every_line(self):
        """Test every heading line is outdented, not only the first."""
        assert outdent_headings("## a\ntext\n### b\n") == "# a\ntext\n## b\n"


@pytest.mark.unit
class TestOptionsSummary:
    """Test options_summary."""

    def test_no_groups_gives_pointer_only(self, sample_groups):
        assert options_summary("", sample_groups) == POINTER

    def test_groups(self, sample_groups):
        """Test each named group with flags gets a section."""
        text = options_summary("Sync,Copy,Empty", sample_groups)
        assert text.startswith(
            "Options shared with other commands are described next.\n" + POINTER
        )
        assert text.index("#### Copy Options\n\n") < text.index("#### Sync Options\n\n")
        assert "Flags for anything which can copy a file.\n\n```\n" in text
        assert "Empty" not in text
        assert text.endswith("```\n\n")

    def test_flags_url(self, sample_groups):
        assert options_summary("", sample_groups, "/global/") == (
            "See the [global flags page](/global/) for global options not listed here.\n\n"
        )

    def test_unknown_group(self, sample_groups):
        with pytest.raises(FlagGroupError):
            options_summary("Nope", sample_groups)


@pytest.mark.unit
class TestProcessDocument:
    """Test PostProcessor.process_document."""

    def test_child_with_groups(self, processor):
        """Test the inherited options become the group summary."""
        out = processor.process_document("app_sub.md", CHILD_DOC)
        assert out.startswith(
            "# app sub\n\nSub command\n\n"
            "Options shared with other commands are described next.\n" + POINTER
        )
        assert "### Copy Options\n\n" in out
        assert "--delete-after" not in out
        assert "inherited" not in out
        assert out.endswith(
            "## See Also\n\n* [app](/commands/app/)\t - Application root\n\n"
        )

    def test_child_without_groups(self, sample_tree, lg):
        """Test a command without groups gets the pointer only."""
        commands = collect_details(sample_tree)
        processor = PostProcessor(
            commands, "app.md", sample_tree.flag_groups, DocsConfig(), lg
        )
        doc = CHILD_DOC.replace("app sub", "app secret")
        out = processor.process_document("app_secret.md", doc)
        assert out == (
            "# app secret\n\nSub command\n\n"
            + POINTER
            + "## See Also\n\n* [app](/commands/app/)\t - Application root\n\n"
        )

    def test_root_special_case(self, processor):
        """Test the root page only gets its see also heading normalized."""
        doc = "## app\n\n### Options\n\n```\n-h\n```\n\n### SEE ALSO\n\n* x\n"
        assert processor.process_document("app.md", doc) == (
            "# app\n\n## Options\n\n```\n-h\n```\n\n## See Also\n\n* x\n"
        )

    def test_missing_markers_on_child(self, processor):
        """Test only the root page may lack the markers."""
        with pytest.raises(ConsistencyError, match="failed to find cut points"):
            processor.process_document("app_sub.md", "## app sub\n\n### SEE ALSO\n")


@pytest.mark.integration
class TestProcessFiles:
    """Test PostProcessor on files."""

    def test_process_file(self, processor, temp_dir):
        """Test a page is rewritten in place."""
        path = temp_dir / "app_sub.md"
        path.write_text(CHILD_DOC)
        processor.process_file(path)
        assert path.read_text().startswith("# app sub\n")

    def test_unknown_file(self, processor, temp_dir):
        """Test pages without a command are an internal error."""
        path = temp_dir / "stray.md"
        path.write_text("## stray\n")
        with pytest.raises(ConsistencyError, match="didn't find command for 'stray.md'"):
            processor.process_file(path)

    def test_process_dir(self, processor, temp_dir):
        """Test every file is processed, directories are skipped."""
        (temp_dir / "app_sub.md").write_text(CHILD_DOC)
        (temp_dir / "app.md").write_text("## app\n\n### SEE ALSO\n")
        (temp_dir / "empty").mkdir()
        assert processor.process_dir(temp_dir) == 2
        assert (temp_dir / "app.md").read_text() == "# app\n\n## See Also\n"

    def test_first_error_aborts(self, processor, temp_dir):
        """Test files after the first failure are left untouched."""
        (temp_dir / "app.md").write_text("## app\n")
        (temp_dir / "app_sub.md").write_text("## broken\n")
        (temp_dir / "zzz.md").write_text("## later\n")
        with pytest.raises(ConsistencyError):
            processor.process_dir(temp_dir)
        assert (temp_dir / "app.md").read_text() == "# app\n"
        assert (temp_dir / "zzz.md").read_text() == "## later\n"
