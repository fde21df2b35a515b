# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Read XSD files into the Schema tree used by the emitter.

Prerequisites:
    No external dependencies - uses xml.etree.ElementTree (stdlib)

Usage:
    reader = XsdReader('schema.xsd')
    schema = reader.read()

Notes:
- Type references bound to the XML Schema namespace are normalized to
  ``xs:<local>`` whatever prefix the document uses; other prefixes are
  dropped.
- complexContent extensions of a base defined in the same file inherit the
  base's elements and attributes. A complexContent restriction restates
  its content model and only inherits the base attributes it does not
  redeclare.
- Nested sequence/all groups are flattened into their parent group.
- A choice nested inside another group cannot be represented and raises
  UnsupportedConstructError; a top-level choice is kept so that the
  emitter rejects it.
"""

from __future__ import annotations

import io
import logging
import urllib.request
from pathlib import Path
from xml.etree import ElementTree as ET

from .cardinality import effective_min_occurs
from .errors import SchemaReadError, UnsupportedConstructError
from .schema import (
    UNBOUNDED,
    All,
    Attribute,
    Choice,
    ComplexType,
    Element,
    Group,
    InlineComplex,
    InlineSimple,
    NoType,
    Restriction,
    Schema,
    Sequence,
    SimpleContentExtension,
    SimpleType,
    TypeReference,
    TypeSource,
    Use,
)

logger = logging.getLogger(__name__)

XSD_NS = "http://www.w3.org/2001/XMLSchema"
NS = {"xs": XSD_NS}

GROUP_CLASSES: dict[str, type[Group]] = {
    "sequence": Sequence,
    "all": All,
    "choice": Choice,
}


class XsdReader:
    """Build a Schema tree from XSD using xml.etree.ElementTree.

    Args:
        xsd_source: Path to an XSD file, a URL, or the XSD text itself.
    """

    def __init__(self, xsd_source: str | Path):
        self.xsd_source = xsd_source
        data = self._load(xsd_source)
        self.prefixes = self._collect_prefixes(data)
        try:
            self.root = ET.fromstring(data)
        except ET.ParseError as exc:
            raise SchemaReadError(f"Invalid XSD {self._describe()}: {exc}") from exc
        if self.root.tag != self._q("schema"):
            raise SchemaReadError(f"Invalid XSD {self._describe()}: root is not xs:schema")

        # Registries of global nodes, by local name
        self.complex_nodes: dict[str, ET.Element] = {}
        self.element_nodes: dict[str, ET.Element] = {}
        self._complex_cache: dict[str, ComplexType] = {}
        self._resolving: set[str] = set()

        self._index_schema()

    # -------------------------------------------------------------------------
    # Loading and indexing
    # -------------------------------------------------------------------------

    def _load(self, src: str | Path) -> bytes:
        """Load XSD bytes from a URL, a file path, or inline text."""
        if isinstance(src, str) and src.lstrip().startswith("<"):
            return src.encode("utf-8")
        path_str = str(src)
        if path_str.startswith(("http://", "https://")):
            req = urllib.request.Request(path_str, headers={"User-Agent": "genro-xsdgen"})
            with urllib.request.urlopen(req) as response:
                return response.read()
        path = Path(path_str)
        if not path.exists():
            raise SchemaReadError(f"XSD file not found: {path}")
        return path.read_bytes()

    def _collect_prefixes(self, data: bytes) -> dict[str, str]:
        """Map every namespace prefix declared in the document to its URI."""
        prefixes: dict[str, str] = {}
        try:
            for _event, (prefix, uri) in ET.iterparse(io.BytesIO(data), events=("start-ns",)):
                prefixes.setdefault(prefix, uri)
        except ET.ParseError:
            # reported by the main parse
            pass
        return prefixes

    def _index_schema(self) -> None:
        """Index global complex types and elements by name."""
        for child in self.root:
            name = child.get("name")
            if not name:
                continue
            if child.tag == self._q("complexType"):
                self.complex_nodes[name] = child
            elif child.tag == self._q("element"):
                self.element_nodes[name] = child

    def _describe(self) -> str:
        source = str(self.xsd_source)
        return "<inline>" if source.lstrip().startswith("<") else source

    # -------------------------------------------------------------------------
    # Helper methods
    # -------------------------------------------------------------------------

    def _q(self, tag: str) -> str:
        """Return fully qualified tag name."""
        return f"{{{XSD_NS}}}{tag}"

    def _local(self, tag: str) -> str:
        """Strip the namespace from a Clark-notation tag."""
        return tag.split("}", 1)[1] if "}" in tag else tag

    def _strip_ns(self, name: str) -> str:
        """Strip namespace prefix from a QName value."""
        return name.split(":", 1)[1] if ":" in name else name

    def _type_ref(self, qname: str) -> str:
        """Normalize a type QName: XSD builtins become ``xs:<local>``."""
        if ":" in qname:
            prefix, local = qname.split(":", 1)
        else:
            prefix, local = "", qname
        if self.prefixes.get(prefix) == XSD_NS:
            return f"xs:{local}"
        return local

    def _int(self, node: ET.Element, attr: str) -> int | None:
        value = node.get(attr)
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            raise SchemaReadError(
                f"Invalid {attr}={value!r} on <{self._local(node.tag)}>"
            ) from None

    # -------------------------------------------------------------------------
    # Schema
    # -------------------------------------------------------------------------

    def read(self) -> Schema:
        """Parse the whole document into a Schema tree."""
        schema = Schema()
        for child in self.root:
            tag = self._local(child.tag) if isinstance(child.tag, str) else ""
            if tag == "complexType":
                schema.complex_types.append(self._named_complex(child))
            elif tag == "simpleType":
                schema.simple_types.append(self._parse_simple_type(child))
            elif tag == "element":
                schema.elements.append(self._parse_element(child))
            else:
                logger.debug("Skipping top-level <%s>", tag)
        return schema

    def _named_complex(self, node: ET.Element) -> ComplexType:
        name = node.get("name")
        if name and name in self._complex_cache:
            return self._complex_cache[name]
        return self._parse_complex_type(node)

    # -------------------------------------------------------------------------
    # Elements and attributes
    # -------------------------------------------------------------------------

    def _parse_element(self, node: ET.Element) -> Element:
        """Parse xs:element (declaration or ref)."""
        min_occurs = self._int(node, "minOccurs")
        max_occurs = node.get("maxOccurs")
        ref = node.get("ref")
        if ref:
            name = self._strip_ns(ref)
            target = self.element_nodes.get(name)
            if target is not None and target.get("type"):
                source: TypeSource = TypeReference(self._type_ref(target.get("type", "")))
            else:
                source = TypeReference(name)
            return Element(name, source, min_occurs, max_occurs)

        name = node.get("name")
        if not name:
            raise SchemaReadError("xs:element without name or ref")
        return Element(name, self._type_source(node), min_occurs, max_occurs)

    def _parse_attribute(self, node: ET.Element) -> Attribute | None:
        """Parse xs:attribute; returns None for nameless declarations."""
        name = node.get("name") or node.get("ref")
        if not name:
            return None
        name = self._strip_ns(name)
        try:
            use = Use(node.get("use", "optional"))
        except ValueError:
            raise SchemaReadError(
                f"Invalid use={node.get('use')!r} on attribute '{name}'"
            ) from None
        return Attribute(name, self._type_source(node), use)

    def _parse_attributes(self, node: ET.Element) -> list[Attribute]:
        out: list[Attribute] = []
        for attr_node in node.findall("xs:attribute", NS):
            attr = self._parse_attribute(attr_node)
            if attr is not None:
                out.append(attr)
        return out

    def _type_source(self, node: ET.Element) -> TypeSource:
        type_ref = node.get("type")
        if type_ref:
            return TypeReference(self._type_ref(type_ref))
        inline_ct = node.find("xs:complexType", NS)
        if inline_ct is not None:
            return InlineComplex(self._parse_complex_type(inline_ct))
        inline_st = node.find("xs:simpleType", NS)
        if inline_st is not None:
            return InlineSimple(self._parse_simple_type(inline_st))
        return NoType()

    # -------------------------------------------------------------------------
    # SimpleType parsing
    # -------------------------------------------------------------------------

    def _parse_simple_type(self, node: ET.Element) -> SimpleType:
        """Parse xs:simpleType; list and union types get no restriction."""
        simple_type = SimpleType(name=node.get("name"))
        restriction = node.find("xs:restriction", NS)
        if restriction is None:
            return simple_type
        base = restriction.get("base")
        literals = [
            facet.get("value", "")
            for facet in restriction.findall("xs:enumeration", NS)
        ]
        simple_type.restriction = Restriction(
            base=self._type_ref(base) if base else "xs:string",
            enumerations=literals or None,
        )
        return simple_type

    # -------------------------------------------------------------------------
    # ComplexType parsing
    # -------------------------------------------------------------------------

    def _parse_complex_type(self, node: ET.Element) -> ComplexType:
        """Parse xs:complexType."""
        name = node.get("name")
        complex_type = ComplexType(name=name, attributes=self._parse_attributes(node))

        sc = node.find("xs:simpleContent", NS)
        if sc is not None:
            ext = sc.find("xs:extension", NS)
            if ext is None:
                ext = sc.find("xs:restriction", NS)
            if ext is not None:
                complex_type.content = SimpleContentExtension(
                    base=self._type_ref(ext.get("base", "xs:string")),
                    attributes=self._parse_attributes(ext),
                )
            return self._cache(complex_type)

        cc = node.find("xs:complexContent", NS)
        if cc is not None:
            ext = cc.find("xs:extension", NS)
            if ext is None:
                ext = cc.find("xs:restriction", NS)
            if ext is not None:
                complex_type.attributes.extend(self._parse_attributes(ext))
                complex_type.content = self._parse_model_group(ext)
                base = ext.get("base")
                if base and self._local(ext.tag) == "extension":
                    self._inherit(complex_type, self._strip_ns(base))
                elif base:
                    self._restrict(complex_type, self._strip_ns(base))
            return self._cache(complex_type)

        complex_type.content = self._parse_model_group(node)
        return self._cache(complex_type)

    def _cache(self, complex_type: ComplexType) -> ComplexType:
        if complex_type.name:
            self._complex_cache[complex_type.name] = complex_type
        return complex_type

    def _resolve_base(self, base_name: str) -> ComplexType | None:
        base_node = self.complex_nodes.get(base_name)
        if base_node is None:
            logger.debug("Base type %s is not defined in this schema", base_name)
            return None
        if base_name in self._resolving:
            raise SchemaReadError(f"Circular complexContent derivation through '{base_name}'")
        self._resolving.add(base_name)
        try:
            return self._complex_cache.get(base_name) or self._parse_complex_type(base_node)
        finally:
            self._resolving.discard(base_name)

    def _restrict(self, complex_type: ComplexType, base_name: str) -> None:
        """A restriction restates its content; only undeclared base attributes carry over."""
        base = self._resolve_base(base_name)
        if base is None:
            return
        declared = {attr.name for attr in complex_type.attributes}
        complex_type.attributes[:0] = [
            attr for attr in base.attributes if attr.name not in declared
        ]

    def _inherit(self, complex_type: ComplexType, base_name: str) -> None:
        """Prepend the content of a same-file base type."""
        base = self._resolve_base(base_name)
        if base is None:
            return
        complex_type.attributes[:0] = base.attributes
        if isinstance(base.content, Group):
            own = complex_type.content
            if isinstance(own, Group) and not isinstance(base.content, Choice):
                own.elements[:0] = base.content.elements
            elif own is None:
                complex_type.content = type(base.content)(
                    list(base.content.elements), base.content.min_occurs
                )
            else:
                complex_type.content = Choice(base.content.elements + own.elements)
        elif complex_type.content is None:
            complex_type.content = base.content

    def _parse_model_group(self, node: ET.Element) -> Group | None:
        """Parse the sequence/all/choice directly under ``node``."""
        for child in node:
            if not isinstance(child.tag, str):
                continue
            tag = self._local(child.tag)
            if tag in GROUP_CLASSES:
                group = GROUP_CLASSES[tag](
                    elements=self._parse_particles(child),
                    min_occurs=self._int(child, "minOccurs"),
                )
                return group
        return None

    def _parse_particles(self, group: ET.Element) -> list[Element]:
        """Collect the element particles of a group, flattening nested groups."""
        elements: list[Element] = []
        for item in group:
            if not isinstance(item.tag, str):
                continue
            tag = self._local(item.tag)
            if tag == "element":
                elements.append(self._parse_element(item))
            elif tag in ("sequence", "all"):
                elements.extend(self._flatten(item))
            elif tag == "choice":
                raise UnsupportedConstructError(
                    "xs:choice nested in a model group is not supported",
                    f"complexType/{self._local(group.tag)}/choice",
                )
            else:
                logger.debug("Skipping <%s> in model group", tag)
        return elements

    def _flatten(self, nested: ET.Element) -> list[Element]:
        group_min = self._int(nested, "minOccurs")
        group_max = nested.get("maxOccurs")
        out = []
        for element in self._parse_particles(nested):
            element.min_occurs = effective_min_occurs(element.min_occurs, group_min)
            if group_max is not None and group_max != "1":
                element.max_occurs = UNBOUNDED
            out.append(element)
        return out


def read_schema(xsd_source: str | Path) -> Schema:
    """Read ``xsd_source`` (path, URL or XSD text) into a Schema tree."""
    return XsdReader(xsd_source).read()
