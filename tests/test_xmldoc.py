from xml.dom import minidom

import pytest

from ttkkit.xmldoc import XmlAttr, XmlDocument, XmlHelper, XmlNode

SAMPLE = (
    "<config>"
    "<item value='first' kind='a'>alpha</item>"
    "<item value='second' kind='b'>beta</item>"
    "<name>tool</name>"
    "</config>"
)


@pytest.fixture
def doc():
    document = XmlDocument()
    document.from_string(SAMPLE)
    return document


def test_read_attribute_defaults_to_value(doc):
    assert doc.read_attribute_by_tag_name("item") == "first"
    assert doc.read_attribute_by_tag_name("item", "kind") == "a"


def test_read_text(doc):
    assert doc.read_text_by_tag_name("name") == "tool"
    assert doc.read_text_by_tag_name("config") == "alphabetatool"


def test_read_node(doc):
    node = doc.read_node_by_tag_name("item")
    assert node.text == "alpha"
    assert {a.key: a.value for a in node.attrs} == {"value": "first", "kind": "a"}


def test_read_multi(doc):
    assert doc.read_multi_attribute_by_tag_name("item") == ["first", "second"]
    assert doc.read_multi_text_by_tag_name("item") == ["alpha", "beta"]
    nodes = doc.read_multi_node_by_tag_name("item")
    assert [n.text for n in nodes] == ["alpha", "beta"]


def test_missing_tags(doc):
    assert doc.read_attribute_by_tag_name("nope") == ""
    assert doc.read_text_by_tag_name("nope") == ""
    assert doc.read_node_by_tag_name("nope") == XmlNode()
    assert doc.read_multi_text_by_tag_name("nope") == []
    assert doc.read_multi_node_by_tag_name("nope") == []


def test_malformed_xml_raises():
    document = XmlDocument()
    with pytest.raises(ValueError):
        document.from_string("<a><b></a>")


def test_bytes_round_trip(doc):
    other = XmlDocument()
    other.from_bytes(doc.to_bytes())
    assert other.read_multi_text_by_tag_name("item") == ["alpha", "beta"]
    assert other.to_string() == doc.to_string()


def test_no_document():
    document = XmlDocument()
    assert document.to_string() == ""
    assert document.to_bytes() == b""
    with pytest.raises(ValueError):
        document.read_text_by_tag_name("x")


def test_write_and_read_back():
    document = XmlDocument()
    document.from_string("<placeholder/>")
    writer = XmlDocument()
    writer.from_bytes(b"<?xml version='1.0'?><tmp/>")
    writer._document = minidom.Document()
    root = writer.create_root("root", XmlAttr("version", 2))
    writer.write_dom_element(root, "title", "hello")
    writer.write_dom_element(root, "entry", attrs=XmlAttr("size", 7))
    writer.write_dom_element(root, "note", "text", [XmlAttr("a", "x"), XmlAttr("b", 1)])

    reader = XmlDocument()
    reader.from_string(writer.to_string())
    assert reader.read_attribute_by_tag_name("root", "version") == "2"
    assert reader.read_text_by_tag_name("title") == "hello"
    assert reader.read_attribute_by_tag_name("entry", "size") == "7"
    note = reader.read_node_by_tag_name("note")
    assert note.text == "text"
    assert {a.key: a.value for a in note.attrs} == {"a": "x", "b": "1"}


def test_multi_element_with_no_attrs_writes_nothing(doc):
    root = doc.document.documentElement
    before = len(root.childNodes)
    assert doc.write_dom_multi_element(root, "empty", []) is None
    assert doc.write_dom_element(root, "empty", attrs=XmlNode()) is None
    assert len(root.childNodes) == before


def test_multi_element_from_xml_node(doc):
    root = doc.document.documentElement
    node = XmlNode([XmlAttr("value", "third")], "gamma")
    doc.write_dom_multi_element(root, "item", node)
    assert doc.read_multi_attribute_by_tag_name("item") == ["first", "second", "third"]
    assert doc.read_multi_text_by_tag_name("item")[-1] == "gamma"


def test_write_attribute_skips_unsupported_types(doc):
    root = doc.document.documentElement
    doc.write_attribute(root, [XmlAttr("flag", True), XmlAttr("none", None), XmlAttr("n", 5)])
    assert not root.hasAttribute("flag")
    assert not root.hasAttribute("none")
    assert root.getAttribute("n") == "5"


def test_float_attribute_round_trips(doc):
    root = doc.document.documentElement
    doc.write_attribute(root, XmlAttr("ratio", 0.1))
    assert float(root.getAttribute("ratio")) == 0.1


def test_processing_instruction(tmp_path):
    document = XmlDocument()
    document.load(tmp_path / "out.xml")
    document.create_processing_instruction()
    document.create_root("root")
    assert document.to_string().startswith("<?xml version='1.0' encoding='UTF-8'?>")


def test_save_and_from_file(tmp_path):
    path = tmp_path / "data.xml"
    document = XmlDocument()
    document.load(path)
    root = document.create_root("root")
    document.write_dom_element(root, "item", "content", XmlAttr("value", "v"))
    document.save()

    loaded = XmlDocument()
    loaded.from_file(path)
    assert loaded.read_text_by_tag_name("item") == "content"
    assert loaded.read_attribute_by_tag_name("item") == "v"
    assert loaded.path == path


def test_load_truncates_and_reset(tmp_path):
    path = tmp_path / "data.xml"
    path.write_text("<old/>", encoding="utf-8")
    document = XmlDocument()
    document.from_file(path)
    document.reset()
    assert path.read_text(encoding="utf-8") == ""
    assert document.to_string() == ""


def test_reset_without_file_raises(doc):
    with pytest.raises(ValueError):
        doc.reset()


def test_from_missing_file(tmp_path):
    with pytest.raises(OSError):
        XmlDocument().from_file(tmp_path / "missing.xml")


def test_helper_node_name_case_insensitive():
    dom = minidom.parseString("<Root><Item/><other/></Root>")
    helper = XmlHelper(dom.documentElement)
    helper.load()
    assert helper.node_name("item") == "Item"
    assert helper.node_name("ROOT") == "Root"
    assert helper.node_name("missing") == "missing"


def test_helper_with_no_root():
    helper = XmlHelper(None)
    assert helper.has_next() is False
    assert helper.next() is None