"""Command-line interface for winmail."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TextIO

import winmail
from winmail._utils import DEFAULT_MAX_BYTES
from winmail.tnef import (
    AttributeTag,
    ComplianceMode,
    NameIdKind,
    PropertyId,
    PropertyReader,
    TnefComplianceError,
    TnefError,
    TnefReader,
)

_PREVIEW_BYTES = 32
_TABLE_ATTRIBUTES = (
    AttributeTag.MAPI_PROPERTIES,
    AttributeTag.ATTACHMENT,
    AttributeTag.RECIPIENT_TABLE,
)


def _name(value: int) -> str:
    return getattr(value, "name", None) or f"0x{value:08X}"


def _format_value(value: object) -> str:
    if isinstance(value, bytes):
        preview = value[:_PREVIEW_BYTES].hex(" ")
        suffix = " ..." if len(value) > _PREVIEW_BYTES else ""
        return f"<{len(value)} bytes: {preview}{suffix}>"
    return repr(value)


def _read_value(prop: PropertyReader) -> str:
    try:
        return _format_value(prop.read_value())
    except TnefComplianceError:
        raise
    except TnefError as e:
        return f"<unreadable: {e}>"


def _property_label(prop: PropertyReader) -> str:
    tag = prop.property_tag
    if tag.is_named:
        name_id = prop.property_name_id
        if name_id.kind == NameIdKind.NAME:
            return f"{tag} {{{name_id.guid}}}:{name_id.name!r}"
        return f"{tag} {{{name_id.guid}}}:0x{name_id.id:04X}"
    if isinstance(tag.id, PropertyId):
        return f"{tag} {tag.id.name}"
    return str(tag)


def _dump_properties(prop: PropertyReader, indent: str, out: TextIO) -> None:
    while prop.read_next_property():
        label = _property_label(prop)
        if prop.is_embedded_message:
            print(f"{indent}{label}: embedded message", file=out)
            _dump_reader(prop.get_embedded_message_reader(), indent + "    ", out)
            continue
        values = [_read_value(prop)] if prop.value_count else []
        while prop.read_next_value():
            values.append(_read_value(prop))
        if prop.is_multi_valued_property:
            print(f"{indent}{label}: [{', '.join(values)}]", file=out)
        else:
            print(f"{indent}{label}: {', '.join(values)}", file=out)


def _dump_reader(reader: TnefReader, indent: str, out: TextIO) -> None:
    prop = reader.property_reader
    for tag in reader:
        level = _name(reader.attribute_level)
        header = (
            f"{indent}[{level}] {_name(tag)} "
            f"({reader.attribute_raw_value_length} bytes)"
        )
        if tag == AttributeTag.RECIPIENT_TABLE:
            print(f"{header}: {prop.row_count} rows", file=out)
            row = 0
            while prop.read_next_row():
                row += 1
                print(f"{indent}  row {row}:", file=out)
                _dump_properties(prop, indent + "    ", out)
        elif tag in _TABLE_ATTRIBUTES:
            print(f"{header}: {prop.property_count} properties", file=out)
            _dump_properties(prop, indent + "  ", out)
        else:
            print(f"{header}: {_read_value(prop)}", file=out)


def _dump(path: str, args: argparse.Namespace) -> bool:
    mode = ComplianceMode.STRICT if args.strict else ComplianceMode.LOOSE
    try:
        with Path(path).open("rb") as f:
            reader = TnefReader(f, message_codepage=args.codepage, compliance_mode=mode)
            print(
                f"{path}: key=0x{reader.tnef_key:04X} "
                f"codepage={reader.message_codepage or 'default'}"
            )
            _dump_reader(reader, "  ", sys.stdout)
    except OSError as e:
        print(f"winmail: {path}: {e}", file=sys.stderr)
        return False
    except TnefError as e:
        print(f"winmail: {path}: {e}", file=sys.stderr)
        return False
    print(f"{path}: compliance {reader.compliance_status!r}")
    return True


def _detect(path: str, args: argparse.Namespace) -> bool:
    try:
        with Path(path).open("rb") as f:
            data = f.read(args.max_bytes)
    except OSError as e:
        print(f"winmail: {path}: {e}", file=sys.stderr)
        return False
    result = winmail.detect(data, max_bytes=args.max_bytes)
    if args.minimal:
        print(result["encoding"])
    else:
        print(f"{path}: {result['encoding']} with confidence {result['confidence']}")
    return True


def main(argv: list[str] | None = None) -> int:
    """Run the ``winmail`` command-line tool.

    :param argv: Command-line arguments.  Defaults to ``sys.argv[1:]``.
    :returns: ``0`` if every file was processed, ``1`` otherwise.
    """
    parser = argparse.ArgumentParser(
        description="Inspect TNEF (winmail.dat) files and detect text encodings."
    )
    parser.add_argument(
        "--version", action="version", version=f"winmail {winmail.__version__}"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    dump_parser = subparsers.add_parser(
        "dump", help="List the attributes and MAPI properties of TNEF files"
    )
    dump_parser.add_argument("files", nargs="+", help="TNEF files to dump")
    dump_parser.add_argument(
        "--codepage",
        type=int,
        default=0,
        help="Codepage for 8-bit strings (default: taken from the file)",
    )
    dump_parser.add_argument(
        "--strict", action="store_true", help="Stop at the first compliance error"
    )
    dump_parser.set_defaults(handler=_dump)

    detect_parser = subparsers.add_parser(
        "detect", help="Detect the character encoding of files"
    )
    detect_parser.add_argument("files", nargs="+", help="Files to examine")
    detect_parser.add_argument(
        "--minimal", action="store_true", help="Output only the encoding name"
    )
    detect_parser.add_argument(
        "--max-bytes",
        type=int,
        default=DEFAULT_MAX_BYTES,
        help="Maximum number of bytes to examine",
    )
    detect_parser.set_defaults(handler=_detect)

    args = parser.parse_args(argv)
    ok = True
    for path in args.files:
        ok = args.handler(path, args) and ok
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
