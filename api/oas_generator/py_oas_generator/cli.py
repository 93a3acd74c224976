#!/usr/bin/env python3
"""Command-line entry point: render a Python client package from an OpenAPI document."""

import argparse
import contextlib
import json
import logging
import shutil
import sys
import tempfile
import traceback
from collections.abc import Iterator
from pathlib import Path

from ruamel.yaml.error import YAMLError

from py_oas_generator.generator.filters import is_valid_python_identifier
from py_oas_generator.generator.template_engine import PythonCodeGenerator, PythonTemplateEngine
from py_oas_generator.parser.oas_parser import OASParser
from py_oas_generator.utils.file_utils import clean_output_directory, get_relative_path, write_files_to_disk

EXIT_SUCCESS = 0
EXIT_FILE_NOT_FOUND = 1
EXIT_INVALID_SPEC = 2
EXIT_GENERATION_ERROR = 3

USAGE_EXAMPLES = """
Examples:
  %(prog)s openapi.json
  %(prog)s openapi.yaml -o ./client -p my_client
  %(prog)s openapi.json --group-parameters -v
"""


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="py-oas-generator",
        description="Render a typed Python client package from an OpenAPI 3 document",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=USAGE_EXAMPLES,
    )
    parser.add_argument("spec_file", type=Path, metavar="SPEC_FILE", help="OpenAPI document (.json, .yaml or .yml)")
    parser.add_argument(
        "-o",
        "--output",
        dest="output_dir",
        type=Path,
        default=Path("./generated"),
        help="directory receiving the package and its project files (default: %(default)s)",
    )
    parser.add_argument(
        "-p",
        "--package-name",
        dest="package_name",
        default="api_client",
        help="import name of the generated package (default: %(default)s)",
    )
    parser.add_argument("-t", "--template-dir", dest="template_dir", type=Path, help="render with these templates")
    parser.add_argument("-d", "--description", dest="custom_description", help="package description to use")
    parser.add_argument(
        "--group-parameters",
        dest="group_parameters",
        action="store_true",
        help="pass each operation's parameters as one <Operation>Params dataclass",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="list generated files and log at DEBUG")
    return parser


def parse_command_line_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse and validate the command line."""
    parser = build_argument_parser()
    options = parser.parse_args(args)
    if not is_valid_python_identifier(options.package_name):
        parser.error(f"package name {options.package_name!r} is not a valid Python identifier")
    return options


def report_generated_files(files: dict[Path, str], output_dir: Path) -> None:
    print(f"Wrote {len(files)} files:")
    for path in sorted(files):
        print(f"  {get_relative_path(path, output_dir)}")


@contextlib.contextmanager
def restore_on_failure(output_dir: Path) -> Iterator[None]:
    """Empty ``output_dir`` for a fresh run, putting the old content back if the run fails."""
    with tempfile.TemporaryDirectory() as scratch:
        snapshot = None
        if output_dir.is_dir() and any(output_dir.iterdir()):
            snapshot = Path(scratch) / "previous"
            shutil.copytree(output_dir, snapshot)

        clean_output_directory(output_dir)
        try:
            yield
        except Exception:
            if snapshot is not None:
                print("Generation failed; restoring the previous output directory.", file=sys.stderr)
                shutil.rmtree(output_dir, ignore_errors=True)
                shutil.copytree(snapshot, output_dir)
            raise


def generate_python_client_from_spec(
    *,
    spec_file: Path,
    output_dir: Path,
    package_name: str,
    verbose: bool = False,
    template_dir: Path | None = None,
    custom_description: str | None = None,
    group_parameters: bool = False,
) -> dict[Path, str]:
    """Parse ``spec_file`` and render the client package, without writing anything."""
    spec = OASParser().parse_file(spec_file)
    if verbose:
        print(f"Parsed {len(spec.operations)} operations and {len(spec.schemas)} schemas from {spec_file}")

    engine = PythonTemplateEngine(template_dir) if template_dir else None
    generator = PythonCodeGenerator(engine, group_parameters=group_parameters)
    return generator.generate_client(spec, output_dir, package_name, custom_description=custom_description)


def main(args: list[str] | None = None) -> int:
    """Run the generator and return the process exit code."""
    options = parse_command_line_args(args)
    if options.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if not options.spec_file.is_file():
        print(f"Error: no such specification file: {options.spec_file}", file=sys.stderr)
        return EXIT_FILE_NOT_FOUND

    try:
        with restore_on_failure(options.output_dir):
            files = generate_python_client_from_spec(
                spec_file=options.spec_file,
                output_dir=options.output_dir,
                package_name=options.package_name,
                verbose=options.verbose,
                template_dir=options.template_dir,
                custom_description=options.custom_description,
                group_parameters=options.group_parameters,
            )
            write_files_to_disk(files)
    except (json.JSONDecodeError, YAMLError) as e:
        print(f"Error: {options.spec_file} is not a valid JSON or YAML document: {e}", file=sys.stderr)
        return EXIT_INVALID_SPEC
    except Exception as e:
        print(f"Error: generation failed: {e}", file=sys.stderr)
        if options.verbose:
            traceback.print_exc()
        return EXIT_GENERATION_ERROR

    if options.verbose:
        report_generated_files(files, options.output_dir)
    print(f"Python client generated successfully in {options.output_dir}")
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
