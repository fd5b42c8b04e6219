#!/usr/bin/env python3
"""
stylerun - Inline style markup to styled text runs

Reads a markup source file, resolves it into styled runs and writes them
as JSON, ready for a theme-aware renderer.

Markup:
    <title>Hello *world*</title>   tag scope with nested emphasis
    **strong** / __strong__         strong outside any tag (key "st")
    \\<not a tag\\>                 backslash escapes

Output (runs.json):
    [
      {"openTag": "title", "content": "Hello ", "closeTag": "title"},
      {"openTag": "title:em", "content": "world", "closeTag": "title:em"}
    ]

Usage:
    stylerun inputdir/ outputdir/ --inputFile card.srun

Examples:
    # Basic run extraction
    stylerun . output/ --inputFile card.srun

    # Custom output name, show highlighted source, verbose
    stylerun . output/ --inputFile card.srun --outputFile card.json --highlight -vv
"""

import sys
import json
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .lib import parse, InvalidTag, UnconsistentOpenCloseTag, __version__, LOG, state_connectToLogger
from .lib.theme import element_validate
from .lib.lexer import source_highlight
from .config import appsettings
from .models import ProgramState, pipeline


# Define CLI arguments
parser = ArgumentParser(
    description="stylerun - resolve inline style markup into styled text runs",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Input markup file (relative to inputdir)"
)

parser.add_argument(
    "--outputFile",
    default=None,
    type=str,
    help="Runs JSON filename within outputdir. Defaults to STYLERUN_OUTPUT_FILENAME (runs.json)",
)

parser.add_argument(
    "--highlight",
    action="store_true",
    help="Print the source with syntax highlighting after processing",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve all file paths.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the markup file
            - runsOutputFile: Path the runs JSON will be written to
            - envOK: True if environment is valid

    Exits:
        1 if the input file is not found
    """

    state = inputstate.copy()

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile

    if not input_file.is_file():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    state.outputdir.mkdir(parents=True, exist_ok=True)
    state.runsOutputFile = state.outputdir / (state.outputFile or appsettings.output_filename)
    LOG(f"Output file: {state.runsOutputFile}", level=2)

    state.envOK = True
    return state


def source_parse(inputstate: ProgramState) -> ProgramState:
    """
    Read the markup file and parse it into elements.

    Args:
        inputstate: Program state with inputSourceFile path set

    Returns:
        ProgramState with added fields:
            - sourceText: Raw markup
            - parsedElements: List[Element] in document order

    Exits:
        1 if the file cannot be read or contains an unterminated tag
    """

    state = inputstate.copy()

    LOG("Reading source file...", level=1)

    try:
        state.sourceText = state.inputSourceFile.read_text(encoding=appsettings.input_encoding)
        LOG(f"Read {len(state.sourceText)} characters from {state.inputSourceFile.name}", level=2)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)

    LOG("Parsing source into runs...", level=1)
    try:
        state.parsedElements = parse(state.sourceText)
        LOG(f"Parsed {len(state.parsedElements)} runs", level=2)
    except InvalidTag as e:
        print(f"Parse error: {e}", file=sys.stderr)
        sys.exit(1)
    return state


def runs_validate(inputstate: ProgramState) -> ProgramState:
    """
    Reject runs whose open and close tags differ.

    Skipped when appsettings.validate_runs is false.

    Exits:
        1 on the first inconsistent run
    """

    state = inputstate.copy()

    if not appsettings.validate_runs:
        LOG("Run validation disabled", level=2)
        return state

    try:
        for element in state.parsedElements or []:
            element_validate(element)
    except UnconsistentOpenCloseTag as e:
        print(f"Validation error: {e}", file=sys.stderr)
        sys.exit(1)

    LOG("All runs have matching open/close tags", level=3)
    return state


def runs_write(inputstate: ProgramState) -> ProgramState:
    """
    Write parsed runs as JSON.

    Returns:
        ProgramState with added field:
            - writeResult: Dict containing:
                - status: bool (write success)
                - output_file: str (path to the runs file)
                - element_count: int (number of runs written)

    Exits:
        1 if parsedElements is None or the file cannot be written
    """

    state = inputstate.copy()

    if state.parsedElements is None:
        print("Error: No parsed source available", file=sys.stderr)
        sys.exit(1)

    LOG("Writing runs...", level=1)

    payload = [element.dict_export() for element in state.parsedElements]
    try:
        state.runsOutputFile.write_text(
            json.dumps(payload, indent=appsettings.json_indent, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
    except OSError as e:
        print(f"Error writing runs file: {e}", file=sys.stderr)
        if state.verbosity >= 3:
            import traceback

            traceback.print_exc()
        sys.exit(1)

    state.writeResult = {
        "status": True,
        "output_file": str(state.runsOutputFile),
        "element_count": len(payload),
    }
    LOG(f"Wrote {state.runsOutputFile}", level=2)
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display results to the user.

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if writeResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.writeResult:
        print("Error: Runs were not written", file=sys.stderr)
        sys.exit(1)

    LOG("✓ Runs written", level=1)
    LOG(f"  Output: {state.writeResult['output_file']}", level=1)
    LOG(f"  Runs:   {state.writeResult['element_count']}", level=1)

    if state.highlight:
        print(source_highlight(state.sourceText, appsettings.pygments_style), end="")
    return state


def runs_extract(options: Namespace, inputdir: Path, outputdir: Path) -> ProgramState:
    """
    Run the full pipeline for one set of parsed CLI options.

    Orchestrates:
        1. env_check: Validate paths and environment
        2. source_parse: Read and parse the markup
        3. runs_validate: Check open/close tag consistency
        4. runs_write: Write runs JSON
        5. results_report: Summarize (and optionally highlight source)

    Args:
        options: CLI arguments from argparse
        inputdir: Directory containing the markup file
        outputdir: Directory where the runs file will be written

    Returns:
        Final program state
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    return pipeline(state, env_check, source_parse, runs_validate, runs_write, results_report)


@chris_plugin(
    parser=parser,
    title="stylerun - inline style markup to styled text runs",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - resolve a markup file into a runs JSON file.

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """
    runs_extract(options, inputdir, outputdir)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
