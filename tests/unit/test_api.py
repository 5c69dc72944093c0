"""Unit tests for the exporter API."""

import pytest

import scidoc
from scidoc import DocumentExporter, NodeFactory
from scidoc.exceptions import FactoryRequiredError, FormatError, InvalidOptionsError
from scidoc.options import LatexExportOptions, MarkdownExportOptions
from scidoc.spans import RenderResult


def bold(content: str) -> dict:
    return {"type": "text", "content": content, "styles": ["bold"]}


@pytest.fixture
def exporter() -> DocumentExporter:
    """Exporter with a default node factory."""
    return DocumentExporter(NodeFactory())


@pytest.mark.unit
class TestFormats:
    """Test each output format through the exporter."""

    def test_latex(self, exporter: DocumentExporter) -> None:
        """Test LaTeX output from raw data."""
        assert exporter.to_latex([bold("Hello")]) == "\\textbf{Hello}"

    def test_markdown(self, exporter: DocumentExporter) -> None:
        """Test Markdown output from raw data."""
        assert exporter.to_markdown([bold("Hello")]) == "**Hello**"

    def test_text(self, exporter: DocumentExporter) -> None:
        """Test copy-text output from raw data."""
        assert exporter.to_text([bold("Hello")]) == "Hello"

    def test_json(self, exporter: DocumentExporter) -> None:
        """Test JSON output from raw data."""
        assert exporter.to_json([bold("Hello")]) == [bold("Hello")]

    @pytest.mark.parametrize(
        "fmt,expected",
        [
            ("latex", "\\textbf{Hello}"),
            ("markdown", "**Hello**"),
            ("text", "Hello"),
            ("json", [bold("Hello")]),
        ],
    )
    def test_export_dispatch(self, exporter: DocumentExporter, fmt: str, expected) -> None:
        """Test format selection at run time."""
        assert exporter.export([bold("Hello")], fmt) == expected

    def test_unknown_format(self, exporter: DocumentExporter) -> None:
        """Test that unknown formats raise FormatError."""
        with pytest.raises(FormatError) as exc_info:
            exporter.export([bold("Hello")], "pdf")  # type: ignore[arg-type]
        assert exc_info.value.format_name == "pdf"
        assert "markdown" in str(exc_info.value)

    def test_spans(self, exporter: DocumentExporter) -> None:
        """Test span-tracked rendering from raw data."""
        result = exporter.to_latex_with_spans([bold("Hello")])
        assert isinstance(result, RenderResult)
        assert result.slice("export-0") == "\\textbf{Hello}"
        markdown = exporter.to_markdown_with_spans([bold("Hello")])
        assert markdown.slice("export-0") == "**Hello**"


@pytest.mark.unit
class TestOptionsHandling:
    """Test options objects and keyword overrides."""

    def test_kwargs_create_options(self, exporter: DocumentExporter) -> None:
        """Test that keyword arguments build options."""
        assert exporter.to_latex([bold("Hello")], skip_styles=True) == "Hello"

    def test_kwargs_override_options(self, exporter: DocumentExporter) -> None:
        """Test that keyword arguments take precedence over the options object."""
        options = LatexExportOptions(skip_styles=False)
        assert exporter.to_latex([bold("Hello")], options, skip_styles=True) == "Hello"
        assert options.skip_styles is False

    def test_unknown_kwargs_ignored(self, exporter: DocumentExporter) -> None:
        """Test that unknown option names are skipped."""
        assert exporter.to_latex([bold("Hello")], colour="red") == "\\textbf{Hello}"

    def test_text_offsets_kwargs(self, exporter: DocumentExporter) -> None:
        """Test format-specific keyword options."""
        item = {"type": "text", "content": "Hello World"}
        assert exporter.to_text([item], start_offset=6) == "World"

    def test_mismatched_options(self, exporter: DocumentExporter) -> None:
        """Test that options for another format are rejected."""
        with pytest.raises(InvalidOptionsError):
            exporter.export([bold("Hello")], "latex", MarkdownExportOptions())


@pytest.mark.unit
class TestEnsureNodes:
    """Test conversion of mixed input to nodes."""

    def test_generated_ids(self, exporter: DocumentExporter) -> None:
        """Test ids from data or from the item position."""
        nodes = exporter.ensure_nodes([bold("a"), {"type": "text", "content": "b", "id": "custom"}])
        assert [node.id for node in nodes] == ["export-0", "custom"]

    def test_nodes_pass_through(self, exporter: DocumentExporter, factory: NodeFactory) -> None:
        """Test that existing nodes are used as-is."""
        node = factory.create_node(bold("a"), "mine")
        assert exporter.ensure_nodes([node]) == [node]

    def test_unbuildable_items_skipped(self, exporter: DocumentExporter) -> None:
        """Test that empty, non-mapping and unknown items are skipped."""
        items = [{}, "text", {"type": "no-such-kind"}, bold("kept")]
        nodes = exporter.ensure_nodes(items)  # type: ignore[list-item]
        assert [node.id for node in nodes] == ["export-3"]

    def test_factory_required(self) -> None:
        """Test that raw data without a factory raises."""
        with pytest.raises(FactoryRequiredError):
            DocumentExporter().to_latex([bold("Hello")])

    def test_nodes_without_factory(self, factory: NodeFactory) -> None:
        """Test that nodes need no factory."""
        node = factory.create_node(bold("Hello"))
        assert DocumentExporter().to_markdown([node]) == "**Hello**"


@pytest.mark.unit
class TestModuleFunctions:
    """Test the module-level convenience functions."""

    @pytest.fixture
    def nodes(self, factory: NodeFactory) -> list:
        """A single bold text node."""
        return [factory.create_node(bold("Hello"), "t")]

    def test_renders(self, nodes: list) -> None:
        """Test every module-level renderer."""
        assert scidoc.to_latex(nodes) == "\\textbf{Hello}"
        assert scidoc.to_markdown(nodes) == "**Hello**"
        assert scidoc.to_text(nodes) == "Hello"
        assert scidoc.to_json(nodes) == [bold("Hello")]
        assert scidoc.export(nodes, "text") == "Hello"

    def test_spans(self, nodes: list) -> None:
        """Test module-level span rendering."""
        assert scidoc.to_latex_with_spans(nodes).spans["t"].end == len("\\textbf{Hello}")
        assert scidoc.to_markdown_with_spans(nodes).slice("t") == "**Hello**"

    def test_raw_data_rejected(self) -> None:
        """Test that module-level functions have no factory."""
        with pytest.raises(FactoryRequiredError):
            scidoc.to_text([bold("Hello")])

    def test_kwargs(self, nodes: list) -> None:
        """Test keyword options on module-level functions."""
        assert scidoc.to_markdown(nodes, skip_styles=True) == "Hello"

    def test_version(self) -> None:
        """Test that the package exposes a version string."""
        assert isinstance(scidoc.__version__, str)
