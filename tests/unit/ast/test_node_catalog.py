"""Unit tests for the concrete node kinds: anchors, reference text and accessors."""

import pytest

from scidoc.ast import (
    AuthorNode,
    BibItemNode,
    BibliographyNode,
    CaptionNode,
    EquationArrayNode,
    ListNode,
    MetadataNode,
    NodeFactory,
    TabularNode,
)


def text(content: str) -> dict:
    return {"type": "text", "content": content}


@pytest.mark.unit
class TestSectionNode:
    """Test section numbering, anchors and reference text."""

    def test_anchor_from_numbering(self, factory: NodeFactory) -> None:
        """Test that numbered sections anchor on their numbering."""
        node = factory.create_node({"type": "section", "level": 1, "numbering": "2.1", "content": []}, "s")
        assert node.get_anchor_id() == "sec-2.1"
        assert node.get_reference_text() == "Section 2.1"

    def test_anchor_from_label(self, factory: NodeFactory) -> None:
        """Test that unnumbered sections anchor on their first label."""
        node = factory.create_node({"type": "section", "labels": ["intro"], "content": []}, "s")
        assert node.get_anchor_id() == "sec-intro"
        assert node.get_reference_text() is None

    def test_anchor_from_id(self, factory: NodeFactory) -> None:
        """Test the id-based anchor fallback."""
        node = factory.create_node({"type": "section", "content": []}, "s9")
        assert node.get_anchor_id() == "sec-s9"

    def test_explicit_anchor(self, factory: NodeFactory) -> None:
        """Test that an anchor stored in the data wins."""
        node = factory.create_node({"type": "section", "numbering": "1", "anchor_id": "custom", "content": []})
        assert node.get_anchor_id() == "custom"

    def test_deep_levels_are_unnumbered(self, factory: NodeFactory) -> None:
        """Test that paragraph-level sections drop their numbering."""
        node = factory.create_node({"type": "section", "level": 4, "numbering": "1.1.1.1", "content": []})
        assert node.numbering is None

    def test_title_string(self, factory: NodeFactory) -> None:
        """Test the flattened title with and without numbering."""
        node = factory.create_node(
            {"type": "section", "numbering": "3", "title": [text("Results")], "content": []}
        )
        assert node.get_title_str() == "3. Results"
        assert node.get_title_str(include_numbering=False) == "Results"

    def test_invalid_level_defaults_to_one(self, factory: NodeFactory) -> None:
        """Test that a malformed level falls back to 1."""
        node = factory.create_node({"type": "section", "level": "deep", "content": []})
        assert node.level == 1


@pytest.mark.unit
class TestReferenceTargets:
    """Test the reference text of referenceable kinds."""

    def test_equation_reference_text(self, factory: NodeFactory) -> None:
        """Test equations are referenced by their parenthesized number."""
        node = factory.create_node({"type": "equation", "content": "x", "display": "block", "numbering": "4"})
        assert node.get_reference_text() == "(4)"

    def test_math_env_reference_text(self, factory: NodeFactory) -> None:
        """Test theorem-like environments use their name and number."""
        node = factory.create_node({"type": "math_env", "name": "lemma", "numbering": "2", "content": []})
        assert node.get_reference_text() == "lemma 2"
        assert node.display_name == "Lemma"
        assert node.get_anchor_id() == "env-2"

    def test_figure_without_caption(self, factory: NodeFactory) -> None:
        """Test that an uncaptioned figure uses its environment name."""
        node = factory.create_node({"type": "figure", "numbering": "2", "content": []})
        assert node.get_reference_text() == "Figure 2"
        assert node.get_anchor_id() == "fig-2"

    def test_table_anchor_prefix(self, factory: NodeFactory) -> None:
        """Test that tables use their own anchor prefix."""
        node = factory.create_node({"type": "table", "numbering": "1", "content": []})
        assert node.get_anchor_id() == "tab-1"
        assert node.get_reference_text() == "Table 1"

    def test_caption_inside_subfigure(self, factory: NodeFactory) -> None:
        """Test that sub-figure captions combine the parent figure number."""
        figure = factory.create_node(
            {
                "type": "figure",
                "numbering": "2",
                "content": [
                    {
                        "type": "subfigure",
                        "content": [{"type": "caption", "numbering": "1", "content": [text("Left")]}],
                    }
                ],
            }
        )
        caption = figure.get_captions(top_level_only=False)[0]
        assert isinstance(caption, CaptionNode)
        assert caption.get_full_numbering() == "2.1"
        assert caption.get_reference_text() == "Figure 2.1"
        assert figure.get_captions() == []

    def test_caption_counter_name(self, factory: NodeFactory) -> None:
        """Test that an explicit counter name overrides the float name."""
        figure = factory.create_node(
            {
                "type": "figure",
                "numbering": "3",
                "content": [{"type": "caption", "numbering": "3", "counter_name": "plate", "content": []}],
            }
        )
        assert figure.get_reference_text() == "Plate 3"

    def test_captions_drop_styles(self, factory: NodeFactory) -> None:
        """Test that captions and floats never carry styles."""
        figure = factory.create_node(
            {
                "type": "figure",
                "styles": ["bold"],
                "content": [{"type": "caption", "styles": ["italic"], "content": []}],
            }
        )
        assert figure.styles == []
        assert figure.children[0].styles == []

    def test_group_delegates_to_first_child(self, factory: NodeFactory) -> None:
        """Test that a group is referenced like its first child."""
        group = factory.create_node(
            {"type": "group", "content": [{"type": "equation", "content": "x", "numbering": "7"}]}
        )
        assert group.get_reference_text() == "(7)"

    def test_list_item_reference_text(self, factory: NodeFactory) -> None:
        """Test item references for flat and nested enumerations."""
        outer = factory.create_node(
            {
                "type": "list",
                "name": "enumerate",
                "content": [
                    {"type": "item", "content": [text("one")]},
                    {
                        "type": "item",
                        "content": [
                            {
                                "type": "list",
                                "name": "enumerate",
                                "content": [
                                    {"type": "item", "content": [text("a")]},
                                    {"type": "item", "content": [text("b")]},
                                ],
                            }
                        ],
                    },
                ],
            }
        )
        assert isinstance(outer, ListNode)
        second = outer.items[1]
        assert second.get_reference_text() == "Item 2"
        inner = second.content_children[0]
        assert inner.compute_depth() == 1
        assert inner.items[1].get_reference_text() == "Item b"

    def test_list_item_with_custom_bullet(self, factory: NodeFactory) -> None:
        """Test that titled items are referenced by their title."""
        node = factory.create_node(
            {"type": "list", "content": [{"type": "item", "title": [text("*")], "content": [text("x")]}]}
        )
        assert node.items[0].get_reference_text() == "Item *"
        assert node.has_custom_bullets()


@pytest.mark.unit
class TestLeafAccessors:
    """Test accessors on leaf kinds."""

    def test_citation_keys(self, factory: NodeFactory) -> None:
        """Test citation keys from list and string content."""
        assert factory.create_node({"type": "citation", "content": ["a", "b"]}).keys == ["a", "b"]
        assert factory.create_node({"type": "citation", "content": "c"}).keys == ["c"]

    def test_ref_targets(self, factory: NodeFactory) -> None:
        """Test reference targets and the title note."""
        node = factory.create_node({"type": "ref", "content": ["fig:1"], "title": [text("see")]})
        assert node.targets == ["fig:1"]
        assert node.title_text == "see"

    def test_command_prefix(self, factory: NodeFactory) -> None:
        """Test that commands gain a leading backslash."""
        assert factory.create_node({"type": "command", "command": "today"}).latex_command == "\\today"
        assert factory.create_node({"type": "command", "command": "\\and"}).latex_command == "\\and"

    def test_code_language(self, factory: NodeFactory) -> None:
        """Test code language lookup."""
        node = factory.create_node({"type": "code", "content": "print()", "language": "python"})
        assert node.code == "print()"
        assert node.language == "python"

    def test_asset_path(self, factory: NodeFactory) -> None:
        """Test asset path and size accessors."""
        node = factory.create_node({"type": "includegraphics", "path": "a.png", "width": 10})
        assert node.path == "a.png"
        assert node.width == 10
        assert node.height == 0


@pytest.mark.unit
class TestBibliography:
    """Test bibliography entries."""

    def test_bibtex_fields_formatting(self) -> None:
        """Test the readable form of a BibTeX entry with parsed fields."""
        item = BibItemNode(
            {
                "type": "bibitem",
                "key": "erdos59",
                "format": "bibtex",
                "content": "@article{erdos59, ...}",
                "fields": {
                    "title": "On random graphs",
                    "author": "Erdos and Renyi",
                    "year": "1959",
                    "journal": "Publ. Math.",
                    "volume": "6",
                },
            }
        )
        assert item.is_bibtex()
        assert item.get_bibtex_str() == "@article{erdos59, ...}"
        assert item.get_content_str() == "On random graphs. Erdos and Renyi (1959) Publ. Math., vol. 6"
        assert item.get_anchor_id() == "bib-erdos59"

    def test_bibitem_token_content(self) -> None:
        """Test flattening of token-list bibitem content."""
        item = BibItemNode({"type": "bibitem", "key": "k", "content": [text("A. "), text("Author")]})
        assert not item.is_bibtex()
        assert item.get_bibtex_str() is None
        assert item.get_content_str() == "A. Author"

    def test_lookup_by_key(self, factory: NodeFactory) -> None:
        """Test finding an entry by its key."""
        bibliography = factory.create_node(
            {
                "type": "bibliography",
                "content": [
                    {"type": "bibitem", "key": "a", "content": "first"},
                    {"type": "bibitem", "key": "b", "content": "second"},
                ],
            }
        )
        assert isinstance(bibliography, BibliographyNode)
        assert bibliography.get_bibitem_by_key("b").get_content_str() == "second"
        assert bibliography.get_bibitem_by_key("z") is None


@pytest.mark.unit
class TestStructuredKinds:
    """Test kinds with internal structure: tabular, equation arrays and authors."""

    def test_tabular_grid(self, factory: NodeFactory) -> None:
        """Test that rows and cells are built from the raw grid."""
        node = factory.create_node(
            {
                "type": "tabular",
                "content": [
                    [{"content": [text("a")], "colspan": 2}],
                    [{"content": [text("b")]}, {"content": [text("c")], "styles": ["color=red"]}],
                ],
            },
            "tab",
        )
        assert isinstance(node, TabularNode)
        assert len(node.rows) == 2
        assert node.column_count == 2
        assert node.has_spans()
        cell = node.rows[1].cells[1]
        assert cell.id == "tab/row-1/cell-1"
        assert cell.get_cell_color() == "red"
        assert cell.children[0].content == "c"

    def test_tabular_without_spans(self, factory: NodeFactory) -> None:
        """Test span detection on a plain grid."""
        node = factory.create_node({"type": "tabular", "content": [[{"content": [text("a")]}]]})
        assert not node.has_spans()

    def test_equation_array_columns(self, factory: NodeFactory) -> None:
        """Test that row cells are grouped by column."""
        node = factory.create_node(
            {
                "type": "equation_array",
                "name": "align",
                "content": [{"type": "row", "content": [[text("a")], [text("= b"), text(" + c")]]}],
            }
        )
        assert isinstance(node, EquationArrayNode)
        row = node.rows[0]
        assert [len(column) for column in row.columns] == [1, 2]
        assert row.is_inline

    def test_author_groups(self, factory: NodeFactory) -> None:
        """Test splitting an author list on and-commands."""
        node = factory.create_node(
            {
                "type": "author",
                "content": [text("Ada"), {"type": "command", "command": "and"}, text("Alan")],
            }
        )
        assert isinstance(node, AuthorNode)
        groups = node.get_authors()
        assert [[child.content for child in group] for group in groups] == [["Ada"], ["Alan"]]
        assert node.type_label == "Authors"

    def test_metadata_type_label(self, factory: NodeFactory) -> None:
        """Test the label of plain metadata kinds."""
        node = factory.create_node({"type": "email", "content": [text("a@b.c")]})
        assert isinstance(node, MetadataNode)
        assert node.type_label == "Email"
