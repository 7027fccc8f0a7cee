"""
Tests for the table renderer.
"""

from propcycle import cycler
from propcycle.backends import TableFormat, generate_table, save_table_file


def _sample():
    return cycler(c='rg') + cycler(lw=[1, 2])


class TestTextTable:
    """Test plain text output."""

    def test_layout(self):
        """Header, rule, then one row per record."""
        table = generate_table(_sample())
        lines = table.split("\n")

        assert lines[0] == "'c' | 'lw'"
        assert lines[1] == "----+-----"
        assert lines[2] == "'r' | 1"
        assert lines[3] == "'g' | 2"
        assert len(lines) == 4

    def test_columns_sorted(self):
        """Columns are ordered regardless of composition order."""
        a = generate_table(cycler(c='rg') + cycler(lw=[1, 2]))
        b = generate_table(cycler(lw=[1, 2]) + cycler(c='rg'))
        assert a == b

    def test_mixed_key_types(self):
        """Keys that do not compare with each other still render."""
        table = generate_table(cycler('c', 'r') + cycler(3, [0]))
        assert "'c'" in table.split("\n")[0]
        assert "3" in table.split("\n")[0]


class TestHtmlTable:
    """Test HTML output."""

    def test_structure(self):
        """One header row and one row per record."""
        table = generate_table(_sample(), TableFormat.HTML)

        assert table.startswith("<table>")
        assert table.endswith("</table>")
        assert table.count("<tr>") == 3
        assert "<tr><td>0</td><td>&#x27;r&#x27;</td><td>1</td></tr>" in table

    def test_escaping(self):
        """Values are HTML escaped."""
        table = generate_table(cycler(label=['<b>']), TableFormat.HTML)
        assert "&lt;b&gt;" in table
        assert "<b>" not in table

    def test_repr_html_matches(self):
        """Notebook display uses the HTML renderer."""
        cc = _sample()
        assert cc._repr_html_() == generate_table(cc, TableFormat.HTML)


def test_save_table_file(tmp_path):
    """Table is written to disk."""
    path = tmp_path / "cycle.txt"
    save_table_file(_sample(), str(path))

    assert path.read_text() == generate_table(_sample())
