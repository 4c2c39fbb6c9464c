"""Command line interface for glbindgen."""

import argparse
import sys
import urllib.request
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional

from .errors import BindgenError
from .generators import DEFAULT_GENERATOR, GENERATORS, generate
from .parser import load_registry
from .registry import DEFAULT_NAMESPACE, NAMESPACES, get_namespace
from .resolve import DEFAULT_PROFILE, DEFAULT_VERSION, PROFILES, Filter, resolve, unknown_extensions


def download_registry_xml(url: str, output_path: Path, force: bool = False) -> None:
    """Download a registry XML file from Khronos."""
    if output_path.exists() and not force:
        print(f"{output_path.name} already exists at {output_path}. Use --force to re-download.")
        return

    print(f"Downloading {output_path.name} from {url}...")
    urllib.request.urlretrieve(url, output_path)
    print(f"Downloaded {output_path.name} to {output_path}")


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate Mojo bindings from a Khronos registry")
    parser.add_argument(
        "--api",
        default=DEFAULT_NAMESPACE,
        choices=sorted(NAMESPACES),
        help=f"API to generate (default: {DEFAULT_NAMESPACE})",
    )
    parser.add_argument(
        "--profile",
        default=DEFAULT_PROFILE,
        choices=PROFILES,
        help=f"Target profile (default: {DEFAULT_PROFILE})",
    )
    parser.add_argument(
        "--version", default=DEFAULT_VERSION, help=f"Target API version (default: {DEFAULT_VERSION})"
    )
    parser.add_argument(
        "--generator",
        default=DEFAULT_GENERATOR,
        choices=sorted(GENERATORS),
        help=f"Binding layout (default: {DEFAULT_GENERATOR})",
    )
    parser.add_argument(
        "--extension",
        action="append",
        default=[],
        dest="extensions",
        help="Extension to include (repeatable)",
    )
    parser.add_argument(
        "--full",
        action="store_true",
        help="Ignore version, profile and extensions and emit the whole registry",
    )
    parser.add_argument(
        "--strict-extensions",
        action="store_true",
        help="Fail when a requested extension is not in the registry",
    )
    parser.add_argument(
        "--xml", type=Path, default=None, help="Path to the registry XML (default: <api xml name>)"
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("mojo/glbindings"),
        help="Output directory for generated files",
    )
    parser.add_argument(
        "--download",
        action="store_true",
        help="Download the registry XML from Khronos",
    )
    parser.add_argument("--force", action="store_true", help="Force re-download of the XML")
    return parser


def build_filter(args: argparse.Namespace) -> Optional[Filter]:
    if args.full:
        return None
    return Filter(
        api=args.api,
        version=args.version,
        profile=args.profile,
        extensions=tuple(args.extensions),
        strict_extensions=args.strict_extensions,
    )


def run(args: argparse.Namespace) -> Path:
    """Generate bindings for parsed arguments and return the written module path."""
    namespace = get_namespace(args.api)
    xml_path = args.xml or Path(namespace.xml_file)

    if args.download or not xml_path.exists():
        download_registry_xml(namespace.url, xml_path, args.force)

    filt = build_filter(args)
    print(f"Parsing {xml_path} for {namespace.name}...")
    raw = load_registry(xml_path, namespace.name)

    if filt is not None:
        for name in unknown_extensions(raw, filt):
            if not filt.strict_extensions:
                print(f"Warning: extension {name} is not declared for {namespace.name}; ignoring it")

    registry = resolve(raw, filt)
    source = generate(registry, args.generator)

    args.output_dir.mkdir(parents=True, exist_ok=True)
    module_path = args.output_dir / f"{namespace.name}.mojo"
    module_path.write_text(source)
    (args.output_dir / "__init__.mojo").write_text(
        f"# AUTOGENERATED. DO NOT EDIT.\n\nfrom .{namespace.name} import *\n"
    )

    print(
        f"Generated {len(registry.commands())} functions and {len(registry.enums())} "
        f"constants ({args.generator} layout)"
    )
    print(f"Output written to: {module_path}")
    return module_path


def main(argv: Optional[list[str]] = None) -> None:
    """Main CLI entry point."""
    args = build_argument_parser().parse_args(argv)

    try:
        run(args)
    except BindgenError as err:
        print(f"Error [{err.code}]: {err.message}")
        if err.suggestion:
            print(f"Hint: {err.suggestion}")
        raise SystemExit(1) from err
    except (OSError, ET.ParseError) as err:
        print(f"Error: {err}")
        raise SystemExit(1) from err


if __name__ == "__main__":
    main(sys.argv[1:])
