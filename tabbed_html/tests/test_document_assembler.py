"""Tests for merging fragments into a tabbed display."""
import tempfile
import unittest
from pathlib import Path
from xml.etree import ElementTree as ET

from tabbed_html.assembly.asset_injector import AssetCache, ResourceLoader
from tabbed_html.assembly.document_assembler import DocumentAssembler
from tabbed_html.model.document_model import OutputDocument
from tabbed_html.model.elements import Fragment
from tabbed_html.model.errors import AssetNotFoundError


def fragment(xml: str) -> Fragment:
    return Fragment(ET.fromstring(xml))


def buttons(document: OutputDocument) -> list:
    return document.body.findall(".//div[@class='tab']/button")


def contents(document: OutputDocument) -> list:
    return list(document.body.find(".//div[@class='tabcontentdiv']"))


class DocumentAssemblerTest(unittest.TestCase):
    """Ordering, fallbacks and idempotence of the assembled document."""

    def setUp(self) -> None:
        self.assembler = DocumentAssembler()

    def test_two_tables_scenario(self) -> None:
        first = fragment('<div id="t1" class="tabcontent" title="Table 1"><table/></div>')
        second = fragment('<div id="t2" class="tabcontent" title="Table 2"><table/></div>')

        document = self.assembler.assemble("Doc X", [first, second])

        headings = document.body.findall(".//h1")
        self.assertEqual([h.text for h in headings], ["Doc X"])
        self.assertEqual([b.text for b in buttons(document)], ["Table 1", "Table 2"])
        self.assertEqual(
            [b.get("onclick") for b in buttons(document)],
            ["openTab(event, 't1', 'tabcontent')", "openTab(event, 't2', 'tabcontent')"],
        )
        self.assertEqual([b.get("class") for b in buttons(document)], ["tablinks", "tablinks"])
        blocks = contents(document)
        self.assertIs(blocks[0], first.root)
        self.assertIs(blocks[1], second.root)
        self.assertEqual(document.diagnostics, [])

    def test_button_order_follows_input(self) -> None:
        ids = ["c", "a", "d", "b"]
        fragments = [fragment(f'<div id="{i}" class="tabcontent"/>') for i in ids]
        document = self.assembler.assemble("Order", fragments)
        self.assertEqual([b.text for b in buttons(document)], ids)
        self.assertEqual([block.get("id") for block in contents(document)], ids)

    def test_every_button_targets_one_block(self) -> None:
        fragments = [
            fragment('<div id="x1" class="tabcontent" title="One"/>'),
            fragment('<section id="x2"><h2/><div class="tabcontent"><p/></div></section>'),
            fragment('<html><body><div id="x3" class="tabcontent"/></body></html>'),
        ]
        document = self.assembler.assemble("Targets", fragments)
        block_ids = [block.get("id") for block in contents(document)]
        for button in buttons(document):
            target = button.get("onclick").split("'")[1]
            self.assertEqual(block_ids.count(target), 1)

    def test_identifier_label_fallback(self) -> None:
        document = self.assembler.assemble("Doc", [fragment('<div id="t3" class="tabcontent"/>')])
        self.assertEqual([b.text for b in buttons(document)], ["t3"])

    def test_existing_heading_is_kept(self) -> None:
        existing = OutputDocument.from_element(
            ET.fromstring("<html><body><h1>Existing</h1></body></html>")
        )
        document = self.assembler.assemble(
            "Ignored", [fragment('<div id="t1" class="tabcontent"/>')], existing
        )
        self.assertIs(document, existing)
        self.assertEqual([h.text for h in document.body.iter("h1")], ["Existing"])

    def test_repeated_assembly_has_single_structure(self) -> None:
        document = self.assembler.assemble("Doc", [fragment('<div id="a" class="tabcontent"/>')])
        self.assembler.ensure_structure(document, "Doc")
        self.assembler.assemble("Doc", [fragment('<div id="b" class="tabcontent"/>')], document)

        self.assertEqual(len(list(document.body.iter("h1"))), 1)
        self.assertEqual(len(document.head.findall("style")), 1)
        self.assertEqual(len(document.head.findall("script")), 1)
        self.assertEqual(len(document.body.findall(".//div[@class='tab']")), 1)
        self.assertEqual(len(document.body.findall(".//div[@class='tabcontentdiv']")), 1)
        self.assertEqual([b.text for b in buttons(document)], ["a", "b"])

    def test_content_node_extracted_from_wrapper(self) -> None:
        frag = fragment(
            '<html xmlns="http://www.w3.org/1999/xhtml"><body>'
            '<div id="t9" class="tabcontent" title="Nine"><p>text</p></div>'
            "</body></html>"
        )
        document = self.assembler.assemble("Doc", [frag])
        blocks = contents(document)
        self.assertEqual(len(blocks), 1)
        self.assertEqual(blocks[0].tag, "div")
        self.assertEqual(blocks[0][0].tag, "p")
        self.assertEqual([b.text for b in buttons(document)], ["t9"])
        self.assertEqual(len(frag.root.find("{http://www.w3.org/1999/xhtml}body")), 0)

    def test_content_node_receives_fragment_id(self) -> None:
        frag = fragment('<section id="w1" title="Wrapped"><div class="tabcontent"><p/></div></section>')
        document = self.assembler.assemble("Doc", [frag])
        self.assertEqual(contents(document)[0].get("id"), "w1")
        self.assertEqual(buttons(document)[0].get("onclick"), "openTab(event, 'w1', 'tabcontent')")

    def test_content_node_keeps_its_own_id(self) -> None:
        frag = fragment('<section id="w1" title="Wrapped"><div id="table1" class="tabcontent"/></section>')
        document = self.assembler.assemble("Doc", [frag])
        self.assertEqual(contents(document)[0].get("id"), "table1")
        self.assertEqual(buttons(document)[0].get("onclick"), "openTab(event, 'table1', 'tabcontent')")
        self.assertEqual(document.diagnostics, [])

    def test_inner_heading_does_not_trigger_duplicate_warning(self) -> None:
        document = self.assembler.assemble(
            "Doc", [fragment('<div id="a" class="tabcontent"><h1>inner</h1></div>')]
        )
        self.assembler.assemble("Ignored", [fragment('<div id="b" class="tabcontent"/>')], document)
        headings = [h.text for h in document.body.iter("h1")]
        self.assertEqual(headings, ["Doc", "inner"])
        self.assertEqual(document.diagnostics, [])

    def test_fragment_without_content_keeps_orphan_button(self) -> None:
        orphan = fragment('<div id="o1" title="Orphan"><p>no marker</p></div>')
        document = self.assembler.assemble("Doc", [orphan])
        self.assertEqual([b.text for b in buttons(document)], ["Orphan"])
        self.assertEqual(contents(document), [])
        self.assertEqual(len(document.warnings), 1)
        self.assertIn("tabcontent", document.warnings[0].message)

    def test_untitled_fragment_without_id_has_no_button(self) -> None:
        anonymous = fragment('<div class="tabcontent"><p>anonymous</p></div>')
        named = fragment('<div id="n1" class="tabcontent"/>')
        document = self.assembler.assemble("Doc", [anonymous, named])
        self.assertEqual([b.text for b in buttons(document)], ["n1"])
        self.assertEqual(len(contents(document)), 2)
        self.assertEqual(len(document.warnings), 1)

    def test_duplicate_identifier_first_wins(self) -> None:
        first = fragment('<div id="dup" class="tabcontent" title="First"/>')
        second = fragment('<div id="dup" class="tabcontent" title="Second"/>')
        document = self.assembler.assemble("Doc", [first, second])
        self.assertEqual([b.text for b in buttons(document)], ["First"])
        self.assertEqual(contents(document), [first.root])
        self.assertEqual(len(document.warnings), 1)
        self.assertIn("dup", document.warnings[0].message)

    def test_identifier_already_in_existing_document(self) -> None:
        existing = OutputDocument.from_element(
            ET.fromstring(
                '<html><body><div class="tab"/><div class="tabcontentdiv">'
                '<div id="old" class="tabcontent"/></div></body></html>'
            )
        )
        document = self.assembler.assemble("Doc", [fragment('<div id="old" class="tabcontent"/>')], existing)
        self.assertEqual(len(contents(document)), 1)
        self.assertEqual(buttons(document), [])

    def test_quotes_in_identifier_are_escaped(self) -> None:
        document = self.assembler.assemble("Doc", [fragment("<div id=\"it's\" class=\"tabcontent\"/>")])
        self.assertEqual(buttons(document)[0].get("onclick"), "openTab(event, 'it\\'s', 'tabcontent')")

    def test_missing_asset_aborts(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            assembler = DocumentAssembler(asset_cache=AssetCache(ResourceLoader(Path(tmp))))
            with self.assertRaises(AssetNotFoundError):
                assembler.assemble("Doc", [fragment('<div id="t1" class="tabcontent"/>')])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
