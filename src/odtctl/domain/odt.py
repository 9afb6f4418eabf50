"""OpenDocument Text package synthesis and inspection.

An ODT file is a ZIP archive. Readers sniff the format from the first
member, so ``mimetype`` must come first, uncompressed, holding exactly the
media type with no trailing newline. Every other part is deflated and
listed in ``META-INF/manifest.xml``.

INVARIANT: The manifest is generated from the same part list that is
written, so it never names a missing member and never misses one.
"""

from __future__ import annotations

import io
import re
import zipfile
import zlib
from datetime import date
from xml.etree import ElementTree

from jinja2 import Environment, PackageLoader
from markupsafe import Markup, escape
from pydantic import BaseModel, Field

MIMETYPE = "application/vnd.oasis.opendocument.text"
MIMETYPE_ENTRY = "mimetype"
MANIFEST_ENTRY = "META-INF/manifest.xml"
CONTENT_ENTRY = "content.xml"
STYLES_ENTRY = "styles.xml"
META_ENTRY = "meta.xml"
SETTINGS_ENTRY = "settings.xml"

ODF_VERSION = "1.2"
XML_MEDIA_TYPE = "text/xml"

NAMESPACES: dict[str, str] = {
    "office": "urn:oasis:names:tc:opendocument:xmlns:office:1.0",
    "style": "urn:oasis:names:tc:opendocument:xmlns:style:1.0",
    "text": "urn:oasis:names:tc:opendocument:xmlns:text:1.0",
    "fo": "urn:oasis:names:tc:opendocument:xmlns:xsl-fo-compatible:1.0",
    "meta": "urn:oasis:names:tc:opendocument:xmlns:meta:1.0",
    "dc": "http://purl.org/dc/elements/1.1/",
    "config": "urn:oasis:names:tc:opendocument:xmlns:config:1.0",
    "manifest": "urn:oasis:names:tc:opendocument:xmlns:manifest:1.0",
}

# ZIP timestamps cannot predate 1980; a fixed value keeps output reproducible.
_FIXED_TIMESTAMP = (1980, 1, 1, 0, 0, 0)

# Characters outside the XML 1.0 Char production.
_XML_ILLEGAL = re.compile("[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


class OdtOptions(BaseModel):
    """Which optional parts to include and what to put in them."""

    model_config = {"frozen": True}

    include_styles: bool = True
    include_meta: bool = True
    include_settings: bool = True
    generator: str = "odtctl"
    language: str = "en"
    country: str = "US"


class PackageReport(BaseModel):
    """Result of inspecting an ODT archive."""

    model_config = {"frozen": True}

    entries: list[str] = Field(default_factory=list)
    manifest_entries: list[str] = Field(default_factory=list)
    issues: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues


# ---------------------------------------------------------------------------
# Building
# ---------------------------------------------------------------------------


def default_template_environment() -> Environment:
    """Jinja2 environment over the packaged ``templates/odt`` directory."""
    return Environment(
        loader=PackageLoader("odtctl", "templates/odt"),
        autoescape=True,
        keep_trailing_newline=True,
    )


def sanitize_text(text: str) -> str:
    """Drop characters that cannot appear in an XML 1.0 document."""
    return _XML_ILLEGAL.sub("", text)


def xml_text(text: str) -> Markup:
    """Escape *text* for element content.

    Carriage returns become character references; a literal CR would be
    folded into LF by every XML parser.
    """
    return Markup(str(escape(sanitize_text(text))).replace("\r", "&#13;"))


def optional_parts(options: OdtOptions) -> list[str]:
    """Names of the optional XML parts *options* turns on, in archive order."""
    parts: list[str] = []
    if options.include_styles:
        parts.append(STYLES_ENTRY)
    if options.include_meta:
        parts.append(META_ENTRY)
    if options.include_settings:
        parts.append(SETTINGS_ENTRY)
    return parts


def render_parts(
    body_text: str,
    *,
    options: OdtOptions | None = None,
    created: date | None = None,
    env: Environment | None = None,
) -> list[tuple[str, bytes]]:
    """Render every member after ``mimetype`` as ``(entry_path, bytes)`` in archive order."""
    options = options or OdtOptions()
    env = env or default_template_environment()
    extras = optional_parts(options)
    context = {
        "ns": NAMESPACES,
        "version": ODF_VERSION,
        "mimetype": MIMETYPE,
        "options": options,
    }

    xml_parts: list[str] = [CONTENT_ENTRY, *extras]
    rendered: list[tuple[str, bytes]] = []

    manifest = env.get_template("manifest.xml").render(
        **context, parts=xml_parts, media_type=XML_MEDIA_TYPE
    )
    rendered.append((MANIFEST_ENTRY, manifest.encode("utf-8")))

    content = env.get_template("content.xml").render(
        **context, body=xml_text(body_text), styled=options.include_styles
    )
    rendered.append((CONTENT_ENTRY, content.encode("utf-8")))

    for part in extras:
        text = env.get_template(part).render(
            **context, created=created.isoformat() if created else None
        )
        rendered.append((part, text.encode("utf-8")))
    return rendered


def _zip_info(name: str, compress_type: int) -> zipfile.ZipInfo:
    info = zipfile.ZipInfo(name, date_time=_FIXED_TIMESTAMP)
    info.compress_type = compress_type
    info.create_system = 3
    info.external_attr = 0o644 << 16
    return info


def build_odt(
    body_text: str,
    *,
    options: OdtOptions | None = None,
    created: date | None = None,
    env: Environment | None = None,
) -> bytes:
    """Build a complete ODT archive in memory.

    The whole package is assembled before anything touches disk; callers
    write the returned bytes in one go.

    Args:
        body_text: Text of the document's single paragraph.
        options: Optional parts and their settings.
        created: Written to ``meta:creation-date`` when given.
        env: Template environment (defaults to the packaged templates).
    """
    parts = render_parts(body_text, options=options, created=created, env=env)
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        zf.writestr(_zip_info(MIMETYPE_ENTRY, zipfile.ZIP_STORED), MIMETYPE.encode("ascii"))
        for name, payload in parts:
            zf.writestr(_zip_info(name, zipfile.ZIP_DEFLATED), payload)
    return buffer.getvalue()


# ---------------------------------------------------------------------------
# Inspection
# ---------------------------------------------------------------------------


def _manifest_paths(raw: bytes) -> dict[str, str]:
    """Map ``full-path`` to ``media-type`` for every manifest entry."""
    root = ElementTree.fromstring(raw)
    ns = NAMESPACES["manifest"]
    paths: dict[str, str] = {}
    for entry in root.iter(f"{{{ns}}}file-entry"):
        full_path = entry.get(f"{{{ns}}}full-path")
        if full_path is not None:
            paths[full_path] = entry.get(f"{{{ns}}}media-type", "")
    return paths


# Errors zipfile raises for a member whose bytes cannot be recovered.
_UNREADABLE = (zipfile.BadZipFile, zlib.error, NotImplementedError, EOFError)


def _read_member(zf: zipfile.ZipFile, name: str, issues: list[str]) -> bytes | None:
    try:
        return zf.read(name)
    except _UNREADABLE as exc:
        issues.append(f"Unreadable entry {name}: {exc}")
        return None


def inspect_odt(data: bytes) -> PackageReport:
    """Check *data* against the ODT packaging rules.

    Returns a report listing every problem found; an empty ``issues``
    list means any conforming reader can open the package.
    """
    try:
        zf = zipfile.ZipFile(io.BytesIO(data))
    except zipfile.BadZipFile as exc:
        return PackageReport(issues=[f"Not a ZIP archive: {exc}"])

    issues: list[str] = []
    with zf:
        infos = zf.infolist()
        names = [info.filename for info in infos]

        if not infos or infos[0].filename != MIMETYPE_ENTRY:
            issues.append("First entry is not 'mimetype'")
        else:
            first = infos[0]
            if first.compress_type != zipfile.ZIP_STORED:
                issues.append("'mimetype' entry is compressed")
            if first.extra:
                issues.append("'mimetype' entry has an extra field")
            raw = _read_member(zf, MIMETYPE_ENTRY, issues)
            if raw is not None and raw != MIMETYPE.encode("ascii"):
                issues.append(f"'mimetype' does not contain {MIMETYPE!r}")

        if CONTENT_ENTRY not in names:
            issues.append(f"Missing {CONTENT_ENTRY}")

        parts: dict[str, bytes] = {}
        for name in names:
            if not name.endswith(".xml"):
                continue
            raw = _read_member(zf, name, issues)
            if raw is None:
                continue
            parts[name] = raw
            try:
                ElementTree.fromstring(raw)
            except ElementTree.ParseError as exc:
                issues.append(f"Malformed XML in {name}: {exc}")

        manifest: dict[str, str] = {}
        if MANIFEST_ENTRY not in names:
            issues.append(f"Missing {MANIFEST_ENTRY}")
        elif MANIFEST_ENTRY in parts:
            try:
                manifest = _manifest_paths(parts[MANIFEST_ENTRY])
            except ElementTree.ParseError:
                manifest = {}

        if MANIFEST_ENTRY in names:
            if manifest.get("/") != MIMETYPE:
                issues.append("Manifest root entry '/' does not declare the document mimetype")
            for path in manifest:
                if path == "/" or path.endswith("/"):
                    continue
                if path not in names:
                    issues.append(f"Manifest lists missing entry {path!r}")
            for name in names:
                if name in (MIMETYPE_ENTRY, MANIFEST_ENTRY) or name.endswith("/"):
                    continue
                if name not in manifest:
                    issues.append(f"Entry {name!r} is not listed in the manifest")

    return PackageReport(
        entries=names,
        manifest_entries=sorted(manifest),
        issues=issues,
    )


def extract_text(data: bytes) -> list[str]:
    """Return the text of every paragraph in ``content.xml``."""
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        root = ElementTree.fromstring(zf.read(CONTENT_ENTRY))
    tag = f"{{{NAMESPACES['text']}}}p"
    return ["".join(p.itertext()) for p in root.iter(tag)]
