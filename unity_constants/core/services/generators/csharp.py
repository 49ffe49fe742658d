"""
C# generator — render a ConstantsDocument as UnityConstants.cs.

Layout:

    // <header>

    namespace <Namespace>
    {
        public static class <Block>
        {
            /// <summary>
            /// <summary text>
            /// </summary>
            public const <type> <Identifier> = <value>;
        }
        ...
    }

Blocks are separated by one blank line; groups inside a block (layer
indices, layer masks) likewise. Output uses ``\\n`` line endings and
ends with a single newline, so identical documents render to identical
bytes.
"""

from __future__ import annotations

from unity_constants.core.models.document import CategoryBlock, Constant, ConstantsDocument

INDENT = "    "

_CS_TYPES = {"string": "string", "int": "int"}

# Reserved keywords; contextual keywords are legal identifiers
CSHARP_KEYWORDS = frozenset({
    "abstract", "as", "base", "bool", "break", "byte", "case", "catch",
    "char", "checked", "class", "const", "continue", "decimal", "default",
    "delegate", "do", "double", "else", "enum", "event", "explicit",
    "extern", "false", "finally", "fixed", "float", "for", "foreach",
    "goto", "if", "implicit", "in", "int", "interface", "internal", "is",
    "lock", "long", "namespace", "new", "null", "object", "operator",
    "out", "override", "params", "private", "protected", "public",
    "readonly", "ref", "return", "sbyte", "sealed", "short", "sizeof",
    "stackalloc", "static", "string", "struct", "switch", "this", "throw",
    "true", "try", "typeof", "uint", "ulong", "unchecked", "unsafe",
    "ushort", "using", "virtual", "void", "volatile", "while",
})

_STRING_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\0": "\\0",
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}


def csharp_string(value: str) -> str:
    """Quote ``value`` as a regular C# string literal."""
    out = []
    for ch in value:
        if ch in _STRING_ESCAPES:
            out.append(_STRING_ESCAPES[ch])
        elif ord(ch) < 0x20:
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(ch)
    return '"' + "".join(out) + '"'


def xml_text(text: str) -> str:
    """Escape text for an XML doc comment (and keep it on one line)."""
    text = text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
    return text.replace("\r", " ").replace("\n", " ")


def csharp_identifier(identifier: str) -> str:
    """Declare ``identifier`` as written; keywords get the verbatim ``@`` prefix.

    ``@class`` declares a member named ``class``, so callers still write
    ``Tags.@class`` and no renamed identifier can collide with another.
    """
    return "@" + identifier if identifier in CSHARP_KEYWORDS else identifier


def render_literal(const: Constant) -> str:
    if const.expression is not None:
        return const.expression
    if const.kind == "string":
        return csharp_string(str(const.value))
    return str(int(const.value))


def render_constant(const: Constant, depth: int = 2) -> list[str]:
    pad = INDENT * depth
    return [
        f"{pad}/// <summary>",
        f"{pad}/// {xml_text(const.summary)}",
        f"{pad}/// </summary>",
        f"{pad}public const {_CS_TYPES[const.kind]} {csharp_identifier(const.identifier)}"
        f" = {render_literal(const)};",
    ]


def render_block(block: CategoryBlock, depth: int = 1) -> list[str]:
    pad = INDENT * depth
    lines = [f"{pad}public static class {block.name}", f"{pad}{{"]

    first = True
    for group in block.groups:
        if not group:
            continue
        if not first:
            lines.append("")
        for const in group:
            lines.extend(render_constant(const, depth + 1))
        first = False

    lines.append(f"{pad}}}")
    return lines


def render_csharp(document: ConstantsDocument) -> str:
    """Render the whole file."""
    lines = [f"// {document.header}", "", f"namespace {document.namespace}", "{"]

    for i, block in enumerate(document.blocks):
        if i:
            lines.append("")
        lines.extend(render_block(block))

    lines.append("}")
    return "\n".join(lines) + "\n"
